"""Note names, chord symbols and chord tone spelling.

This module parses the textual chord symbols found in a progression
(``"Dm7"``, ``"Bbmaj7"``, ``"F#m7b5"``, ``"G7/B"``) into a root and a
quality, and spells the chord tones as pitch-class names in chord order:
root, third, fifth, seventh, then extensions.

Module-level constants:
- ``CHORD_INTERVALS``: Maps chord suffixes to spelled interval lists

Module-level helpers:
- ``parse_note_name(name)``: Split ``"Bb3"`` into ``("B", -1, 3)``.
- ``note_pitch(letter, alteration, octave)``: Absolute MIDI pitch, C4 = 60.
- ``parse_chord_symbol(symbol)``: Return a ``Chord`` or ``None`` if unrecognised.
"""

import dataclasses
import re
import typing

import cadenza.intervals


LETTERS = "CDEFGAB"

_NATURAL_PC: typing.List[int] = [0, 2, 4, 5, 7, 9, 11]

_NOTE_RE = re.compile(r"^([A-Ga-g])(#+|b+|x)?(-?\d+)?$")

_CHORD_RE = re.compile(r"^([A-G])(#+|b+)?(.*)$")


_MAJOR = ["1P", "3M", "5P"]
_MINOR = ["1P", "3m", "5P"]
_DIMINISHED = ["1P", "3m", "5d"]
_AUGMENTED = ["1P", "3M", "5A"]
_DOMINANT_7TH = ["1P", "3M", "5P", "7m"]
_MAJOR_7TH = ["1P", "3M", "5P", "7M"]
_MINOR_7TH = ["1P", "3m", "5P", "7m"]
_HALF_DIMINISHED_7TH = ["1P", "3m", "5d", "7m"]
_DIMINISHED_7TH = ["1P", "3m", "5d", "7d"]
_MINOR_MAJOR_7TH = ["1P", "3m", "5P", "7M"]

CHORD_INTERVALS: typing.Dict[str, typing.List[str]] = {
	"": _MAJOR,
	"M": _MAJOR,
	"maj": _MAJOR,
	"major": _MAJOR,
	"m": _MINOR,
	"min": _MINOR,
	"minor": _MINOR,
	"-": _MINOR,
	"dim": _DIMINISHED,
	"°": _DIMINISHED,
	"o": _DIMINISHED,
	"aug": _AUGMENTED,
	"+": _AUGMENTED,
	"5": ["1P", "5P"],
	"sus2": ["1P", "2M", "5P"],
	"sus4": ["1P", "4P", "5P"],
	"sus": ["1P", "4P", "5P"],
	"6": ["1P", "3M", "5P", "6M"],
	"M6": ["1P", "3M", "5P", "6M"],
	"m6": ["1P", "3m", "5P", "6M"],
	"7": _DOMINANT_7TH,
	"dom7": _DOMINANT_7TH,
	"maj7": _MAJOR_7TH,
	"M7": _MAJOR_7TH,
	"ma7": _MAJOR_7TH,
	"Δ": _MAJOR_7TH,
	"Δ7": _MAJOR_7TH,
	"m7": _MINOR_7TH,
	"min7": _MINOR_7TH,
	"-7": _MINOR_7TH,
	"m7b5": _HALF_DIMINISHED_7TH,
	"ø": _HALF_DIMINISHED_7TH,
	"ø7": _HALF_DIMINISHED_7TH,
	"dim7": _DIMINISHED_7TH,
	"°7": _DIMINISHED_7TH,
	"o7": _DIMINISHED_7TH,
	"mMaj7": _MINOR_MAJOR_7TH,
	"mM7": _MINOR_MAJOR_7TH,
	"7sus4": ["1P", "4P", "5P", "7m"],
	"7#5": ["1P", "3M", "5A", "7m"],
	"aug7": ["1P", "3M", "5A", "7m"],
	"7b9": ["1P", "3M", "5P", "7m", "9m"],
	"7#9": ["1P", "3M", "5P", "7m", "9A"],
	"add9": ["1P", "3M", "5P", "9M"],
	"9": ["1P", "3M", "5P", "7m", "9M"],
	"maj9": ["1P", "3M", "5P", "7M", "9M"],
	"M9": ["1P", "3M", "5P", "7M", "9M"],
	"m9": ["1P", "3m", "5P", "7m", "9M"],
	"11": ["1P", "5P", "7m", "9M", "11P"],
	"m11": ["1P", "3m", "5P", "7m", "9M", "11P"],
	"13": ["1P", "3M", "5P", "7m", "9M", "13M"],
	"maj13": ["1P", "3M", "5P", "7M", "9M", "13M"],
	"m13": ["1P", "3m", "5P", "7m", "9M", "13M"],
}


def parse_note_name (name: str) -> typing.Tuple[str, int, typing.Optional[int]]:

	"""Split a note name into letter, alteration and optional octave.

	Parameters:
		name: Note name such as ``"C"``, ``"F#"``, ``"Bb3"`` or ``"Cx4"``.

	Returns:
		``(letter, alteration, octave)`` where alteration counts sharps
		(positive) or flats (negative) and octave is ``None`` when absent.

	Raises:
		ValueError: If the name is not a note.

	Example:
		```python
		parse_note_name("Bb3")  # → ("B", -1, 3)
		parse_note_name("F#")   # → ("F", 1, None)
		```
	"""

	match = _NOTE_RE.match(name.strip())

	if not match:
		raise ValueError(f"Unknown note name: {name!r}")

	letter = match.group(1).upper()
	accidentals = match.group(2) or ""

	if accidentals == "x":
		alteration = 2
	elif accidentals.startswith("#"):
		alteration = len(accidentals)
	else:
		alteration = -len(accidentals)

	octave = int(match.group(3)) if match.group(3) is not None else None

	return letter, alteration, octave


def format_note_name (letter: str, alteration: int) -> str:

	"""Join a letter and an alteration into a note name (``"B", -1`` → ``"Bb"``)."""

	if alteration > 0:
		return letter + "#" * alteration

	return letter + "b" * -alteration


def note_pitch (letter: str, alteration: int, octave: int) -> int:

	"""Return the absolute MIDI pitch for a spelled note, with C4 = 60."""

	return (octave + 1) * 12 + _NATURAL_PC[LETTERS.index(letter)] + alteration


def note_name_to_pc (name: str) -> int:

	"""Return the pitch class (0-11) of a note name, ignoring any octave."""

	letter, alteration, _ = parse_note_name(name)

	return (_NATURAL_PC[LETTERS.index(letter)] + alteration) % 12


@dataclasses.dataclass(frozen=True)
class Chord:

	"""
	A chord as a spelled root and a quality suffix.
	"""

	root: str
	quality: str
	bass: typing.Optional[str] = None


	def intervals (self) -> typing.List[str]:

		"""
		Return the spelled intervals for this chord quality.
		"""

		if self.quality not in CHORD_INTERVALS:
			raise ValueError(f"Unknown chord quality: {self.quality}")

		return list(CHORD_INTERVALS[self.quality])


	def notes (self) -> typing.List[str]:

		"""Return the chord tones as pitch-class names in chord order.

		Example:
			```python
			Chord(root="D", quality="m7").notes()     # ["D", "F", "A", "C"]
			Chord(root="Bb", quality="maj7").notes()  # ["Bb", "D", "F", "A"]
			```
		"""

		return [cadenza.intervals.transpose_note(self.root, interval) for interval in self.intervals()]


	def name (self) -> str:

		"""
		Return the chord symbol.
		"""

		if self.bass:
			return f"{self.root}{self.quality}/{self.bass}"

		return f"{self.root}{self.quality}"


def parse_chord_symbol (symbol: str) -> typing.Optional[Chord]:

	"""Parse a chord symbol, returning ``None`` if it is not recognised.

	A slash bass (``"G7/B"``) is kept on the ``Chord`` but does not change the
	chord tones.

	Example:
		```python
		parse_chord_symbol("F#m7b5")  # Chord(root="F#", quality="m7b5")
		parse_chord_symbol("Xyz9")    # None
		```
	"""

	text = symbol.strip()
	bass: typing.Optional[str] = None

	if "/" in text:
		text, bass_text = text.split("/", 1)
		try:
			parse_note_name(bass_text)
			bass = bass_text
		except ValueError:
			return None

	match = _CHORD_RE.match(text)

	if not match:
		return None

	root = match.group(1) + (match.group(2) or "")
	quality = match.group(3)

	if quality not in CHORD_INTERVALS:
		return None

	return Chord(root=root, quality=quality, bass=bass)
