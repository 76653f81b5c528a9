"""Arpeggios: chord tones played one at a time at a fixed rate.

The chord tones are laid out over ``octave_range`` octaves from the base
octave, sorted by pitch, then reordered by pattern:

=============  =====================================================
``up``         lowest to highest
``down``       highest to lowest
``up-down``    up then back down, without repeating the end notes
``down-up``    down then back up, without repeating the end notes
``random``     shuffled once per chord
``pattern-1``  1-3-5-3 in the base octave
``pattern-2``  1-5-3-5 in the base octave
``broken``     every other note, then the notes skipped
=============  =====================================================

The sequence repeats until the chord's span is full. Notes that start on a
beat are accented.
"""

import random
import typing

import cadenza.constants
import cadenza.constants.durations
import cadenza.constants.velocity
import cadenza.events
import cadenza.harmony
import cadenza.sequence_utils


RATE_TICKS: typing.Dict[str, int] = {
	"quarter": cadenza.constants.durations.QUARTER,
	"eighth": cadenza.constants.durations.EIGHTH,
	"sixteenth": cadenza.constants.durations.SIXTEENTH,
	"triplet": cadenza.constants.durations.TRIPLET_EIGHTH,
}

PATTERNS = ("up", "down", "up-down", "down-up", "random", "pattern-1", "pattern-2", "broken")

BEAT_ACCENT = 15


def build_sequence (
	notes: typing.List[str],
	octave: int,
	octave_range: int,
	pattern: str,
	rng: random.Random,
	analysis: cadenza.harmony.HarmonicAnalysis
) -> typing.List[int]:

	"""Return one cycle of arpeggio pitches for a pattern.

	Example:
		```python
		build_sequence(["C", "E", "G"], 4, 1, "up-down", rng, analysis)  # [60, 64, 67, 64]
		```
	"""

	pitches = sorted(
		analysis.pitch_number(note, note_octave)
		for note_octave in range(octave, octave + octave_range)
		for note in notes
	)

	if pattern == "down":
		return pitches[::-1]

	if pattern == "up-down":
		return pitches + pitches[::-1][1:-1]

	if pattern == "down-up":
		return pitches[::-1] + pitches[1:-1]

	if pattern == "random":
		return cadenza.sequence_utils.shuffled(pitches, rng)

	if pattern in ("pattern-1", "pattern-2") and len(notes) >= 3:
		shape = [0, 1, 2, 1] if pattern == "pattern-1" else [0, 2, 1, 2]
		return [analysis.pitch_number(notes[i], octave) for i in shape]

	if pattern == "broken":
		return pitches[0::2] + pitches[1::2]

	return pitches


def arpeggio (
	chord: str,
	pattern: str = "up",
	rate: str = "eighth",
	beats: float = 4,
	octave: int = 4,
	octave_range: int = 1,
	start_tick: int = 0,
	velocity: int = cadenza.constants.velocity.DEFAULT_CHORD_VELOCITY,
	humanize: float = 0.2,
	rng: typing.Optional[random.Random] = None,
	analysis: typing.Optional[cadenza.harmony.HarmonicAnalysis] = None
) -> typing.List[cadenza.events.NoteEvent]:

	"""Arpeggiate one chord.

	Parameters:
		chord: Chord symbol.
		pattern: Note order (see module docstring); unknown orders play ``up``.
		rate: ``quarter``, ``eighth``, ``sixteenth`` or ``triplet``
			(triplet eighths); unknown rates play eighths.
		beats: Length of the chord in beats.
		octave: Lowest octave.
		octave_range: Number of octaves to span.
		start_tick: Tick where the chord starts.
		velocity: Base velocity; notes on a beat get +15.
		humanize: Timing and velocity looseness 0-1.
		rng: Random source (a fresh ``random.Random()`` if omitted).
		analysis: Harmonic analysis (the built-in one if omitted).

	Returns:
		``floor(beats × 480 / rate)`` events, each ``rate - 10`` ticks long.
	"""

	rng = rng or random.Random()
	analysis = cadenza.harmony.resolve(analysis)

	step_ticks = RATE_TICKS.get(rate, cadenza.constants.durations.EIGHTH)
	span_ticks = cadenza.events.beats_to_ticks(beats)
	count = span_ticks // step_ticks

	sequence = build_sequence(analysis.chord_tones(chord), octave, octave_range, pattern, rng, analysis)
	events: typing.List[cadenza.events.NoteEvent] = []

	for i in range(count):

		tick_offset = round(cadenza.sequence_utils.jitter(rng, humanize * 20))
		velocity_offset = round(cadenza.sequence_utils.jitter(rng, humanize * 15))
		accent = BEAT_ACCENT if (i * step_ticks) % cadenza.constants.TICKS_PER_BEAT == 0 else 0

		events.append(cadenza.events.make_event(
			start_tick + i * step_ticks + tick_offset,
			step_ticks - 10,
			sequence[i % len(sequence)],
			velocity + velocity_offset + accent,
			low = cadenza.constants.velocity.AUDIBLE_FLOOR
		))

	return cadenza.events.fit_to_span(events, start_tick + span_ticks)


def arpeggio_for_progression (
	chords: typing.Sequence[str],
	beats_per_chord: float,
	pattern: str = "up",
	rate: str = "eighth",
	start_tick: int = 0,
	**options: typing.Any
) -> typing.List[cadenza.events.NoteEvent]:

	"""Arpeggiate each chord of a progression in turn; keyword arguments go to ``arpeggio``."""

	events: typing.List[cadenza.events.NoteEvent] = []
	tick = start_tick

	for chord in chords:

		events.extend(arpeggio(chord, pattern, rate, beats=beats_per_chord, start_tick=tick, **options))
		tick += cadenza.events.beats_to_ticks(beats_per_chord)

	return events
