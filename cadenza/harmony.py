"""Harmonic analysis: the theory primitives the generators depend on.

The voice generators never look chords or scales up themselves. They go
through the narrow ``HarmonicAnalysis`` interface:

- ``chord_tones(symbol)`` - pitch-class names in chord order
- ``scale_tones(name)`` - pitch-class names of a scale such as ``"D dorian"``
- ``pitch_number(note, octave)`` - absolute MIDI pitch, C4 = 60
- ``transpose(note, interval)`` - a note name moved by a spelled interval
  or a semitone count

Every lookup degrades instead of failing: an unknown chord symbol gives a C
major triad, an unknown scale gives C major and an unresolvable note gives
middle C. ``TheoryAnalysis`` is the built-in implementation; pass any object
with the same four methods as ``analysis=`` to a generator to swap it out.
"""

import logging
import typing

import cadenza.chords
import cadenza.intervals


logger = logging.getLogger(__name__)

FALLBACK_CHORD: typing.List[str] = ["C", "E", "G"]
FALLBACK_SCALE: typing.List[str] = ["C", "D", "E", "F", "G", "A", "B"]
FALLBACK_PITCH = 60


class HarmonicAnalysis (typing.Protocol):

	"""The theory capability required by the voice generators."""

	def chord_tones (self, symbol: str) -> typing.List[str]: ...

	def scale_tones (self, scale_name: str) -> typing.List[str]: ...

	def pitch_number (self, note: str, octave: typing.Optional[int] = None) -> int: ...

	def transpose (self, note: str, interval: typing.Union[str, int]) -> str: ...


class TheoryAnalysis:

	"""Built-in harmonic analysis backed by ``cadenza.chords`` and ``cadenza.intervals``."""

	def chord_tones (self, symbol: str) -> typing.List[str]:

		"""Return the chord tones of ``symbol``, or C-E-G if it is not recognised.

		Example:
			```python
			TheoryAnalysis().chord_tones("Cmaj7")  # ["C", "E", "G", "B"]
			TheoryAnalysis().chord_tones("Xyz9")   # ["C", "E", "G"]
			```
		"""

		chord = cadenza.chords.parse_chord_symbol(symbol)

		if chord is None:
			logger.debug(f"Unknown chord symbol {symbol!r}, using C major triad")
			return list(FALLBACK_CHORD)

		return chord.notes()


	def scale_tones (self, scale_name: str) -> typing.List[str]:

		"""Return the notes of a ``"<tonic> <mode>"`` scale, or C major if unknown."""

		parts = scale_name.strip().split(None, 1)
		intervals = cadenza.intervals.scale_intervals(parts[1]) if len(parts) == 2 else None

		if intervals is None:
			logger.debug(f"Unknown scale {scale_name!r}, using C major")
			return list(FALLBACK_SCALE)

		try:
			return [cadenza.intervals.transpose_note(parts[0], interval) for interval in intervals]
		except ValueError:
			logger.debug(f"Unknown scale tonic in {scale_name!r}, using C major")
			return list(FALLBACK_SCALE)


	def pitch_number (self, note: str, octave: typing.Optional[int] = None) -> int:

		"""Return the MIDI pitch of a note, or 60 if it cannot be resolved.

		Parameters:
			note: Note name, with its own octave (``"D4"``) or without (``"D"``).
			octave: Octave to use when ``note`` carries none.
		"""

		try:
			letter, alteration, own_octave = cadenza.chords.parse_note_name(note)
		except ValueError:
			return FALLBACK_PITCH

		if own_octave is None:
			own_octave = octave

		if own_octave is None:
			return FALLBACK_PITCH

		pitch = cadenza.chords.note_pitch(letter, alteration, own_octave)

		if not 0 <= pitch <= 127:
			return FALLBACK_PITCH

		return pitch


	def transpose (self, note: str, interval: typing.Union[str, int]) -> str:

		"""Transpose a note name; an unparsable note or interval returns ``note`` unchanged."""

		try:
			return cadenza.intervals.transpose_note(note, interval)
		except ValueError:
			return note


DEFAULT_ANALYSIS: HarmonicAnalysis = TheoryAnalysis()


def resolve (analysis: typing.Optional[HarmonicAnalysis]) -> HarmonicAnalysis:

	"""Return ``analysis`` or the shared default implementation."""

	return analysis if analysis is not None else DEFAULT_ANALYSIS


def chord_tones (symbol: str) -> typing.List[str]:

	"""Chord tones via the default analysis."""

	return DEFAULT_ANALYSIS.chord_tones(symbol)


def scale_tones (scale_name: str) -> typing.List[str]:

	"""Scale tones via the default analysis."""

	return DEFAULT_ANALYSIS.scale_tones(scale_name)


def pitch_number (note: str, octave: typing.Optional[int] = None) -> int:

	"""MIDI pitch via the default analysis."""

	return DEFAULT_ANALYSIS.pitch_number(note, octave)


def transpose (note: str, interval: typing.Union[str, int]) -> str:

	"""Transposition via the default analysis."""

	return DEFAULT_ANALYSIS.transpose(note, interval)
