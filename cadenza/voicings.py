"""Chord voicings and octave-based voice leading.

A voicing is a list of note names with octaves, e.g. ``["D4", "F4", "A5"]``.
``voice()`` picks which chord tones to play from a color hint and then places
them in octaves:

- ``simple`` - the triad (first three chord tones)
- ``jazzy`` / ``shell-voicings`` - root, third and seventh (or fifth)
- ``open`` - root, fifth, third
- anything else - the first ``voice_count`` chord tones

With no previous voicing the notes are spread two per octave upwards from the
base octave. With a previous voicing each note independently takes the
octave (base - 1, base or base + 1) that lands closest to any note of the
previous voicing, so pads move as little as possible between chords.

Example:
	```python
	state = VoiceLeadingState()
	first = state.next("Dm7", color="jazzy")   # ["D4", "F4", "C5"]
	second = state.next("G7", color="jazzy")   # stays close to first
	```
"""

import typing

import cadenza.harmony


DEFAULT_COLOR = "simple"
DEFAULT_OCTAVE = 4
DEFAULT_VOICE_COUNT = 4

Voicing = typing.List[str]


def shell_tones (tones: typing.List[str]) -> typing.List[str]:

	"""Root, third and seventh (fifth for triads); chords under three notes are returned as-is."""

	if len(tones) < 3:
		return list(tones)

	return [tones[0], tones[1], tones[3] if len(tones) >= 4 else tones[2]]


def open_tones (tones: typing.List[str]) -> typing.List[str]:

	"""Root low, fifth in the middle, third on top."""

	if len(tones) < 3:
		return list(tones)

	return [tones[0], tones[2], tones[1]]


def select_tones (
	chord: str,
	color: typing.Optional[str] = DEFAULT_COLOR,
	voice_count: int = DEFAULT_VOICE_COUNT,
	analysis: typing.Optional[cadenza.harmony.HarmonicAnalysis] = None
) -> typing.List[str]:

	"""Choose which chord tones (pitch classes) a color plays."""

	tones = cadenza.harmony.resolve(analysis).chord_tones(chord)

	if color in ("shell-voicings", "jazzy"):
		return shell_tones(tones)

	if color == "simple" or color is None:
		return tones[:3]

	if color == "open":
		return open_tones(tones)

	return tones[:voice_count]


def add_octaves (notes: typing.List[str], octave: int, spread: bool = True) -> Voicing:

	"""Attach octaves to pitch classes; ``spread`` moves up one octave every two notes.

	Example:
		```python
		add_octaves(["C", "E", "G", "B"], 4)  # ["C4", "E4", "G5", "B5"]
		```
	"""

	return [f"{note}{octave + (i // 2 if spread else 0)}" for i, note in enumerate(notes)]


def voice_lead (
	notes: typing.List[str],
	previous_voicing: typing.Optional[Voicing],
	octave: int = DEFAULT_OCTAVE,
	analysis: typing.Optional[cadenza.harmony.HarmonicAnalysis] = None
) -> Voicing:

	"""Place each note in the octave nearest to the previous voicing.

	For every note, octaves ``octave - 1``, ``octave`` and ``octave + 1`` are
	tried and the one whose pitch has the smallest distance to any pitch of
	``previous_voicing`` wins. Ties keep the lowest octave. Without a previous
	voicing the notes are spread from ``octave`` instead.
	"""

	if not previous_voicing:
		return add_octaves(notes, octave, spread=True)

	analysis = cadenza.harmony.resolve(analysis)
	previous_pitches = [analysis.pitch_number(name) for name in previous_voicing]
	result: Voicing = []

	for note in notes:

		best_octave = octave
		best_distance = float("inf")

		for candidate in range(octave - 1, octave + 2):

			pitch = analysis.pitch_number(note, candidate)
			distance = min(abs(pitch - previous) for previous in previous_pitches)

			if distance < best_distance:
				best_distance = distance
				best_octave = candidate

		result.append(f"{note}{best_octave}")

	return result


def voice (
	chord: str,
	color: typing.Optional[str] = DEFAULT_COLOR,
	previous_voicing: typing.Optional[Voicing] = None,
	octave: int = DEFAULT_OCTAVE,
	voice_count: int = DEFAULT_VOICE_COUNT,
	analysis: typing.Optional[cadenza.harmony.HarmonicAnalysis] = None
) -> Voicing:

	"""Voice a chord symbol, leading from ``previous_voicing`` when given.

	Parameters:
		chord: Chord symbol, e.g. ``"Cmaj7"``.
		color: Voicing color (see module docstring).
		previous_voicing: The voicing of the previous chord on this track.
		octave: Base octave.
		voice_count: Tones kept by colors other than simple, shell and open.
		analysis: Harmonic analysis (the built-in one if omitted).

	Returns:
		Note names with octaves, in chord order.
	"""

	notes = select_tones(chord, color, voice_count, analysis)

	return voice_lead(notes, previous_voicing, octave, analysis)


class VoiceLeadingState:

	"""Carry the previous voicing of one track from chord to chord.

	Each track gets its own instance so a pad and a comping part lead
	independently.
	"""

	def __init__ (self, octave: int = DEFAULT_OCTAVE, analysis: typing.Optional[cadenza.harmony.HarmonicAnalysis] = None) -> None:

		"""Start with no previous voicing."""

		self.octave = octave
		self.analysis = analysis
		self.previous_voicing: typing.Optional[Voicing] = None

	def next (self, chord: str, color: typing.Optional[str] = DEFAULT_COLOR, voice_count: int = DEFAULT_VOICE_COUNT) -> Voicing:

		"""Voice ``chord`` against the stored voicing and remember the result."""

		result = voice(chord, color, self.previous_voicing, self.octave, voice_count, self.analysis)
		self.previous_voicing = result

		return result
