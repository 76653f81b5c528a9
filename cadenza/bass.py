"""Bass lines built from chord tones.

Each pattern is derived from the chord's root, third, fifth and (when the
chord has one) seventh, as reported by the harmonic analysis:

- ``walking`` - one note per beat, root first, a chromatic approach into the
  next chord's root on the last beat
- ``root-fifth`` - root on even beats (quarter), fifth on odd beats (eighth)
- ``octave-pulse`` - repeated roots on eighths or sixteenths, jumping an
  octave on the off steps at higher energy
- ``syncopated`` - a fixed five-hit sixteenth-note figure

Unknown patterns play ``root-fifth``. Every hit goes through the same small
performance helper, which delays offbeats for swing and adds timing and
velocity jitter. Bass velocities never drop below 40.
"""

import dataclasses
import random
import typing

import cadenza.constants
import cadenza.constants.durations
import cadenza.constants.velocity
import cadenza.events
import cadenza.harmony


DEFAULT_PATTERN = "root-fifth"

PASSING_TONE_PROBABILITY = 0.3


@dataclasses.dataclass(frozen=True)
class ChordParts:

	"""
	The chord tones a bass line is built from, as pitch-class names.
	"""

	root: str
	third: str
	fifth: str
	seventh: typing.Optional[str] = None

	def tones (self) -> typing.List[str]:

		"""Root, third, fifth and the seventh if there is one."""

		tones = [self.root, self.third, self.fifth]

		if self.seventh:
			tones.append(self.seventh)

		return tones


def chord_parts (symbol: str, analysis: typing.Optional[cadenza.harmony.HarmonicAnalysis] = None) -> ChordParts:

	"""Split a chord symbol into root, third, fifth and optional seventh.

	The fifth is always a perfect fifth above the root, even for diminished
	or augmented chords; the third and seventh are the chord's own second and
	fourth tones.
	"""

	analysis = cadenza.harmony.resolve(analysis)
	tones = analysis.chord_tones(symbol)
	root = tones[0] if tones else "C"

	return ChordParts(
		root = root,
		third = tones[1] if len(tones) > 1 else analysis.transpose(root, "3M"),
		fifth = analysis.transpose(root, "5P"),
		seventh = tones[3] if len(tones) >= 4 else None
	)


def _perform (tick: float, velocity: float, amount: float, swing: float, offbeat: bool, rng: random.Random) -> typing.Tuple[int, int]:

	"""Swing an offbeat and jitter timing (±15 × amount) and velocity (±7.5 × amount)."""

	if offbeat and swing > 0:
		tick += swing * cadenza.constants.TICKS_PER_STEP * 0.5

	if amount > 0:
		tick += (rng.random() - 0.5) * amount * 30
		velocity += round((rng.random() - 0.5) * amount * 15)

	return int(round(max(0, tick))), cadenza.constants.velocity.clamp(velocity, cadenza.constants.velocity.AUDIBLE_FLOOR)


def _walking (
	parts: ChordParts,
	next_parts: typing.Optional[ChordParts],
	beats: int,
	octave: int,
	start_tick: int,
	swing: float,
	amount: float,
	energy: float,
	rng: random.Random,
	analysis: cadenza.harmony.HarmonicAnalysis
) -> typing.List[cadenza.events.NoteEvent]:

	tones = parts.tones()
	events: typing.List[cadenza.events.NoteEvent] = []

	for beat in range(beats):

		if beat == 0:
			note = parts.root

		elif beat == beats - 1 and next_parts is not None:
			from_below = rng.random() > 0.5
			note = analysis.transpose(next_parts.root, -1 if from_below else 1)

		elif beat == 2 and beats >= 4:
			note = parts.fifth

		elif rng.random() > PASSING_TONE_PROBABILITY:
			note = rng.choice(tones)

		else:
			target = rng.choice(tones)
			note = analysis.transpose(target, -1 if rng.random() > 0.5 else 1)

		base_velocity = 90 if beat == 0 else 70 + round(energy * 20)
		tick, velocity = _perform(start_tick + beat * cadenza.constants.TICKS_PER_BEAT, base_velocity, amount, swing, beat % 2 == 1, rng)

		# Slightly detached.
		events.append(cadenza.events.NoteEvent(
			start_tick = tick,
			duration_ticks = cadenza.constants.durations.QUARTER - 40,
			pitch = analysis.pitch_number(note, octave),
			velocity = velocity
		))

	return events


def _root_fifth (
	parts: ChordParts,
	beats: int,
	octave: int,
	start_tick: int,
	swing: float,
	amount: float,
	energy: float,
	rng: random.Random,
	analysis: cadenza.harmony.HarmonicAnalysis
) -> typing.List[cadenza.events.NoteEvent]:

	events: typing.List[cadenza.events.NoteEvent] = []

	for beat in range(beats):

		is_root = beat % 2 == 0

		if is_root:
			note, base_velocity, duration = parts.root, 85 + round(energy * 20), cadenza.constants.durations.QUARTER
		else:
			note, base_velocity, duration = parts.fifth, 65 + round(energy * 15), cadenza.constants.durations.EIGHTH

		tick, velocity = _perform(start_tick + beat * cadenza.constants.TICKS_PER_BEAT, base_velocity, amount, swing, not is_root, rng)

		events.append(cadenza.events.NoteEvent(
			start_tick = tick,
			duration_ticks = duration,
			pitch = analysis.pitch_number(note, octave),
			velocity = velocity
		))

	return events


def _octave_pulse (
	parts: ChordParts,
	beats: int,
	octave: int,
	start_tick: int,
	amount: float,
	energy: float,
	rng: random.Random,
	analysis: cadenza.harmony.HarmonicAnalysis
) -> typing.List[cadenza.events.NoteEvent]:

	steps_per_beat = 4 if energy > 0.7 else 2
	step_ticks = cadenza.constants.TICKS_PER_BEAT / steps_per_beat
	events: typing.List[cadenza.events.NoteEvent] = []

	for beat in range(beats):
		for step in range(steps_per_beat):

			high = step % 2 == 1 and energy > 0.5
			base_velocity = 100 if step == 0 else 70 + round(energy * 25)

			# Tighter and straight: a fraction of the humanize amount, no swing.
			tick, velocity = _perform(start_tick + beat * cadenza.constants.TICKS_PER_BEAT + step * step_ticks, base_velocity, amount * 0.3, 0, False, rng)

			events.append(cadenza.events.NoteEvent(
				start_tick = tick,
				duration_ticks = int(step_ticks) - 10,
				pitch = analysis.pitch_number(parts.root, octave + 1 if high else octave),
				velocity = velocity
			))

	return events


def _syncopated (
	parts: ChordParts,
	beats: int,
	octave: int,
	start_tick: int,
	swing: float,
	amount: float,
	energy: float,
	rng: random.Random,
	analysis: cadenza.harmony.HarmonicAnalysis
) -> typing.List[cadenza.events.NoteEvent]:

	# (sixteenth step, note, velocity, duration)
	figure = [
		(0, parts.root, 100, cadenza.constants.durations.EIGHTH),
		(5, parts.fifth, 80, cadenza.constants.durations.SIXTEENTH),
		(8, parts.root, 70, cadenza.constants.durations.SIXTEENTH),
		(12, parts.third, 85, cadenza.constants.durations.EIGHTH),
		(14, parts.root, 75, cadenza.constants.durations.SIXTEENTH),
	]

	total_steps = beats * 4
	events: typing.List[cadenza.events.NoteEvent] = []

	for step, note, step_velocity, duration in figure:

		if step >= total_steps:
			continue

		base_velocity = round(step_velocity * (0.7 + energy * 0.3))
		tick, velocity = _perform(start_tick + step * cadenza.constants.TICKS_PER_STEP, base_velocity, amount, swing, step % 2 == 1, rng)

		events.append(cadenza.events.NoteEvent(
			start_tick = tick,
			duration_ticks = duration,
			pitch = analysis.pitch_number(note, octave),
			velocity = velocity
		))

	return events


def bass_line (
	chord: str,
	next_chord: typing.Optional[str] = None,
	pattern: typing.Optional[str] = DEFAULT_PATTERN,
	beats: float = 4,
	swing: float = 0.0,
	humanize: float = 0.3,
	energy: float = 0.7,
	octave: int = 2,
	start_tick: int = 0,
	rng: typing.Optional[random.Random] = None,
	analysis: typing.Optional[cadenza.harmony.HarmonicAnalysis] = None
) -> typing.List[cadenza.events.NoteEvent]:

	"""Generate a bass line for one chord.

	Parameters:
		chord: Chord symbol, e.g. ``"Dm7"``.
		next_chord: The following chord; ``walking`` approaches its root.
		pattern: ``walking``, ``root-fifth``, ``octave-pulse`` or
			``syncopated``.
		beats: Length of the chord in beats.
		swing: Offbeat delay 0-1.
		humanize: Timing and velocity looseness 0-1.
		energy: 0-1; raises velocities and busies ``octave-pulse``.
		octave: Octave of the root (2 puts C at MIDI 36).
		start_tick: Tick where the chord starts.
		rng: Random source (a fresh ``random.Random()`` if omitted).
		analysis: Harmonic analysis (the built-in one if omitted).

	Returns:
		Events that all end by ``start_tick + beats × 480``.

	Example:
		```python
		events = cadenza.bass.bass_line("Dm7", next_chord="G7", pattern="walking", rng=random.Random(3))
		```
	"""

	rng = rng or random.Random()
	analysis = cadenza.harmony.resolve(analysis)

	parts = chord_parts(chord, analysis)
	whole_beats = int(beats)

	if pattern == "walking":
		next_parts = chord_parts(next_chord, analysis) if next_chord else None
		events = _walking(parts, next_parts, whole_beats, octave, start_tick, swing, humanize, energy, rng, analysis)

	elif pattern == "octave-pulse":
		events = _octave_pulse(parts, whole_beats, octave, start_tick, humanize, energy, rng, analysis)

	elif pattern == "syncopated":
		events = _syncopated(parts, whole_beats, octave, start_tick, swing, humanize, energy, rng, analysis)

	else:
		events = _root_fifth(parts, whole_beats, octave, start_tick, swing, humanize, energy, rng, analysis)

	span_end = start_tick + cadenza.events.beats_to_ticks(beats)

	return cadenza.events.fit_to_span(events, span_end)


def bass_for_progression (
	chords: typing.Sequence[str],
	beats_per_chord: float,
	pattern: typing.Optional[str] = DEFAULT_PATTERN,
	start_tick: int = 0,
	**options: typing.Any
) -> typing.List[cadenza.events.NoteEvent]:

	"""Generate a bass line across a progression, one chord after another.

	Each chord looks ahead to the next one; the last chord looks ahead to the
	first, so a looping progression walks back into its start. Remaining
	keyword arguments (``swing``, ``humanize``, ``energy``, ``octave``,
	``rng``, ``analysis``) are passed to ``bass_line``.
	"""

	events: typing.List[cadenza.events.NoteEvent] = []
	tick = start_tick

	for i, chord in enumerate(chords):

		next_chord = chords[i + 1] if i + 1 < len(chords) else chords[0]

		events.extend(bass_line(
			chord,
			next_chord = next_chord,
			pattern = pattern,
			beats = beats_per_chord,
			start_tick = tick,
			**options
		))

		tick += cadenza.events.beats_to_ticks(beats_per_chord)

	return events
