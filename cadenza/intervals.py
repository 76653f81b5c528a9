"""Spelled intervals, transposition and scale definitions.

Intervals are written the way lead sheets spell them: a number and a
quality, in either order (``"3M"`` or ``"M3"``, ``"5P"``, ``"7m"``,
``"-2m"`` for a descending minor second). Qualities are ``P`` (perfect),
``M`` (major), ``m`` (minor), ``A`` (augmented) and ``d`` (diminished).

Transposing by a spelled interval keeps letter names correct, so D up a
minor third is F (not E#) and C down a minor second is B.

Module-level constants:
- ``SCALE_DEFINITIONS``: Maps scale names to spelled interval lists
- ``SEMITONE_INTERVALS``: Default spelling for each semitone distance 0-11
"""

import re
import typing

import cadenza.chords


# Semitones above the tonic for each letter step (unison..seventh).
_STEP_SEMITONES: typing.List[int] = [0, 2, 4, 5, 7, 9, 11]

# Unison, fourth and fifth are perfect; the rest are major/minor.
_PERFECT_STEPS = {0, 3, 4}

_INTERVAL_RE = re.compile(r"^(?:(-?)(\d+)([PMmAd]+)|([PMmAd]+)(-?)(\d+))$")


SEMITONE_INTERVALS: typing.List[str] = [
	"1P", "2m", "2M", "3m", "3M", "4P", "5d", "5P", "6m", "6M", "7m", "7M"
]


SCALE_DEFINITIONS: typing.Dict[str, typing.List[str]] = {
	"major": ["1P", "2M", "3M", "4P", "5P", "6M", "7M"],
	"ionian": ["1P", "2M", "3M", "4P", "5P", "6M", "7M"],
	"minor": ["1P", "2M", "3m", "4P", "5P", "6m", "7m"],
	"aeolian": ["1P", "2M", "3m", "4P", "5P", "6m", "7m"],
	"dorian": ["1P", "2M", "3m", "4P", "5P", "6M", "7m"],
	"phrygian": ["1P", "2m", "3m", "4P", "5P", "6m", "7m"],
	"lydian": ["1P", "2M", "3M", "4A", "5P", "6M", "7M"],
	"mixolydian": ["1P", "2M", "3M", "4P", "5P", "6M", "7m"],
	"locrian": ["1P", "2m", "3m", "4P", "5d", "6m", "7m"],
	"harmonic minor": ["1P", "2M", "3m", "4P", "5P", "6m", "7M"],
	"melodic minor": ["1P", "2M", "3m", "4P", "5P", "6M", "7M"],
	"major pentatonic": ["1P", "2M", "3M", "5P", "6M"],
	"minor pentatonic": ["1P", "3m", "4P", "5P", "7m"],
	"blues": ["1P", "3m", "4P", "5d", "5P", "7m"],
	"whole tone": ["1P", "2M", "3M", "4A", "5A", "7m"],
}


def parse_interval (name: str) -> typing.Tuple[int, int]:

	"""Parse a spelled interval into ``(letter_steps, semitones)``.

	Both values are signed: a descending interval returns negative steps and
	semitones.

	Parameters:
		name: Interval such as ``"3M"``, ``"P5"``, ``"-2m"`` or ``"9M"``.

	Raises:
		ValueError: If the interval cannot be parsed or its quality does not
			fit its number (e.g. ``"3P"``).

	Example:
		```python
		parse_interval("5P")   # → (4, 7)
		parse_interval("-2m")  # → (-1, -1)
		parse_interval("9M")   # → (8, 14)
		```
	"""

	match = _INTERVAL_RE.match(name.strip())

	if not match:
		raise ValueError(f"Unknown interval: {name!r}")

	if match.group(2):
		sign, number, quality = match.group(1), int(match.group(2)), match.group(3)
	else:
		quality, sign, number = match.group(4), match.group(5), int(match.group(6))

	if number < 1:
		raise ValueError(f"Interval number must be at least 1: {name!r}")

	steps = number - 1
	octaves, simple = divmod(steps, 7)
	semitones = _STEP_SEMITONES[simple] + 12 * octaves

	if simple in _PERFECT_STEPS:
		if quality == "P":
			alteration = 0
		elif set(quality) == {"A"}:
			alteration = len(quality)
		elif set(quality) == {"d"}:
			alteration = -len(quality)
		else:
			raise ValueError(f"Interval {name!r} cannot be major or minor")

	else:
		if quality == "M":
			alteration = 0
		elif quality == "m":
			alteration = -1
		elif set(quality) == {"A"}:
			alteration = len(quality)
		elif set(quality) == {"d"}:
			alteration = -1 - len(quality)
		else:
			raise ValueError(f"Interval {name!r} cannot be perfect")

	semitones += alteration
	direction = -1 if sign == "-" else 1

	return direction * steps, direction * semitones


def from_semitones (semitones: int) -> str:

	"""Return the default spelled interval for a semitone distance.

	Chromatic steps are spelled as minor seconds, so ``-1`` gives ``"-2m"``
	and ``+1`` gives ``"2m"``.

	Example:
		```python
		from_semitones(7)    # → "5P"
		from_semitones(-1)   # → "-2m"
		from_semitones(14)   # → "9M"
		```
	"""

	direction = -1 if semitones < 0 else 1
	octaves, simple = divmod(abs(semitones), 12)

	name = SEMITONE_INTERVALS[simple]
	number = int(name[:-1]) + 7 * octaves
	quality = name[-1]

	return f"{'-' if direction < 0 else ''}{number}{quality}"


def transpose_note (note: str, interval: typing.Union[str, int]) -> str:

	"""Transpose a note name by a spelled interval or a semitone count.

	The letter name moves by the interval's step count and the accidental is
	chosen to land on the right pitch, so spelling follows the interval. An
	octave suffix, when present, is carried through.

	Parameters:
		note: Note name with optional octave (``"D"``, ``"F#"``, ``"Bb3"``).
		interval: Spelled interval (``"3m"``) or semitone count (``-1``).

	Raises:
		ValueError: If the note or interval cannot be parsed.

	Example:
		```python
		transpose_note("D", "3m")    # → "F"
		transpose_note("C", -1)      # → "B"
		transpose_note("E", 1)       # → "F"
		transpose_note("A3", "5P")   # → "E4"
		```
	"""

	if isinstance(interval, int):
		interval = from_semitones(interval)

	letter, alteration, octave = cadenza.chords.parse_note_name(note)
	steps, semitones = parse_interval(interval)

	letter_index = cadenza.chords.LETTERS.index(letter)
	source_pc = (_STEP_SEMITONES[letter_index] + alteration) % 12

	new_index = (letter_index + steps) % 7
	target_pc = (source_pc + semitones) % 12

	new_alteration = (target_pc - _STEP_SEMITONES[new_index]) % 12
	if new_alteration > 6:
		new_alteration -= 12

	name = cadenza.chords.format_note_name(cadenza.chords.LETTERS[new_index], new_alteration)

	if octave is None:
		return name

	absolute = cadenza.chords.note_pitch(letter, alteration, octave) + semitones
	new_octave = (absolute - _STEP_SEMITONES[new_index] - new_alteration) // 12 - 1

	return f"{name}{new_octave}"


def scale_intervals (mode: str) -> typing.Optional[typing.List[str]]:

	"""Return the spelled intervals of a scale mode, or ``None`` if unknown."""

	key = mode.strip().lower().replace("_", " ").replace("-", " ")

	if key not in SCALE_DEFINITIONS:
		return None

	return list(SCALE_DEFINITIONS[key])
