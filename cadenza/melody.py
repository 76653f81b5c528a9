"""Lead melodies over a chord, drawn from chord tones and the key's scale.

Four styles:

- ``lyrical`` - long notes moving by step, with occasional beat-long rests
- ``riff-based`` - a four-note ostinato (1-5-3-1) in eighth, eighth,
  quarter, quarter, accenting the start of each repeat
- ``improvisatory`` - busier, mixed sixteenth/triplet/quarter rhythms and
  chromatic neighbours, more often as tension rises
- ``call-response`` - a chord-tone phrase in the first half, a softer scale
  phrase in the second, resolving to the root

Stepwise motion only considers notes within four semitones (a major third)
of the previous pitch, searching the octave below and above as well, and
weights closer notes more heavily. Across a progression the last pitch of
each chord is carried into the next, so lines connect.
"""

import random
import typing

import cadenza.constants
import cadenza.constants.durations as dur
import cadenza.constants.velocity
import cadenza.events
import cadenza.harmony
import cadenza.sequence_utils


DEFAULT_STYLE = "lyrical"

REGISTER_OCTAVES: typing.Dict[str, int] = {
	"low": 3,
	"mid": 4,
	"high": 5,
}

# Largest leap (semitones) considered stepwise.
MAX_STEP = 4

LYRICAL_REST_PROBABILITY = 0.15


def octave_for_register (register: typing.Optional[str]) -> int:

	"""Octave for a register name; mid (4) when unknown."""

	return REGISTER_OCTAVES.get(register or "mid", 4)


def choose_stepwise_note (
	last_pitch: int,
	chord_tones: typing.List[str],
	scale_notes: typing.List[str],
	octave: int,
	prefer_chord_tone: bool,
	rng: random.Random,
	analysis: cadenza.harmony.HarmonicAnalysis
) -> int:

	"""Pick a pitch near ``last_pitch``, weighting by ``5 - distance``.

	Candidates come from the chord tones alone when ``prefer_chord_tone`` is
	set, otherwise from the scale plus the chord tones, in octaves
	``octave - 1`` to ``octave + 1``. If nothing is within a major third the
	chord root is returned.
	"""

	pool = chord_tones if prefer_chord_tone else scale_notes + chord_tones
	candidates: typing.List[int] = []

	for note in pool:
		for candidate_octave in range(octave - 1, octave + 2):

			pitch = analysis.pitch_number(note, candidate_octave)

			if abs(pitch - last_pitch) <= MAX_STEP:
				candidates.append(pitch)

	if not candidates:
		return analysis.pitch_number(chord_tones[0], octave)

	weights = [MAX_STEP + 1 - abs(pitch - last_pitch) for pitch in candidates]

	return cadenza.sequence_utils.pick_weighted(candidates, weights, rng)


def _lyrical (
	chord_tones: typing.List[str],
	scale_notes: typing.List[str],
	beats: float,
	octave: int,
	start_tick: int,
	velocity: int,
	humanize: float,
	energy: float,
	previous_note: typing.Optional[int],
	rng: random.Random,
	analysis: cadenza.harmony.HarmonicAnalysis
) -> typing.List[cadenza.events.NoteEvent]:

	end_tick = start_tick + cadenza.events.beats_to_ticks(beats)
	last_pitch = previous_note if previous_note is not None else analysis.pitch_number(chord_tones[0], octave)

	# Longer notes at lower energy.
	if energy > 0.6:
		durations, weights = [dur.QUARTER, dur.EIGHTH, dur.DOTTED_QUARTER], [2, 3, 1]
	else:
		durations, weights = [dur.HALF, dur.DOTTED_QUARTER, dur.QUARTER], [2, 2, 1]

	events: typing.List[cadenza.events.NoteEvent] = []
	tick = start_tick

	while tick < end_tick:

		duration = cadenza.sequence_utils.pick_weighted(durations, weights, rng)

		if rng.random() < LYRICAL_REST_PROBABILITY:
			tick += dur.QUARTER
			continue

		pitch = choose_stepwise_note(last_pitch, chord_tones, scale_notes, octave, tick == start_tick, rng, analysis)
		last_pitch = pitch

		tick_offset = round(cadenza.sequence_utils.jitter(rng, humanize * 30))
		velocity_offset = round(cadenza.sequence_utils.jitter(rng, humanize * 15))

		events.append(cadenza.events.make_event(
			max(start_tick, tick + tick_offset),
			min(duration, end_tick - tick - 10),
			pitch,
			velocity + velocity_offset,
			low = 50,
			high = 100
		))

		tick += duration

	return events


def _riff (
	chord_tones: typing.List[str],
	beats: float,
	octave: int,
	start_tick: int,
	velocity: int,
	humanize: float,
	rng: random.Random,
	analysis: cadenza.harmony.HarmonicAnalysis
) -> typing.List[cadenza.events.NoteEvent]:

	root = chord_tones[0]
	riff = [
		root,
		chord_tones[2] if len(chord_tones) > 2 else root,
		chord_tones[1] if len(chord_tones) > 1 else root,
		root,
	]
	rhythm = [dur.EIGHTH, dur.EIGHTH, dur.QUARTER, dur.QUARTER]

	end_tick = start_tick + cadenza.events.beats_to_ticks(beats)
	events: typing.List[cadenza.events.NoteEvent] = []
	tick = start_tick
	index = 0

	while tick < end_tick:

		duration = rhythm[index % len(rhythm)]

		tick_offset = round(cadenza.sequence_utils.jitter(rng, humanize * 20))
		velocity_offset = round(cadenza.sequence_utils.jitter(rng, humanize * 10))
		accent = 10 if index % 4 == 0 else 0

		events.append(cadenza.events.make_event(
			max(start_tick, tick + tick_offset),
			min(duration - 10, end_tick - tick - 10),
			analysis.pitch_number(riff[index % len(riff)], octave),
			velocity + velocity_offset + accent,
			low = 50,
			high = 110
		))

		tick += duration
		index += 1

	return events


def _improvisatory (
	chord_tones: typing.List[str],
	scale_notes: typing.List[str],
	beats: float,
	octave: int,
	start_tick: int,
	velocity: int,
	humanize: float,
	energy: float,
	tension: float,
	rng: random.Random,
	analysis: cadenza.harmony.HarmonicAnalysis
) -> typing.List[cadenza.events.NoteEvent]:

	end_tick = start_tick + cadenza.events.beats_to_ticks(beats)
	last_pitch = analysis.pitch_number(chord_tones[0], octave)

	durations = [dur.SIXTEENTH, dur.EIGHTH, dur.TRIPLET_EIGHTH, dur.QUARTER]
	weights = [energy * 2, 3, 1, 2 - energy]
	rest_probability = 0.1 + (1 - energy) * 0.15

	events: typing.List[cadenza.events.NoteEvent] = []
	tick = start_tick

	while tick < end_tick:

		duration = cadenza.sequence_utils.pick_weighted(durations, weights, rng)

		if rng.random() < rest_probability:
			tick += dur.EIGHTH
			continue

		if rng.random() < tension * 0.3:
			pitch = last_pitch + (1 if rng.random() > 0.5 else -1)
		else:
			pitch = choose_stepwise_note(last_pitch, chord_tones, scale_notes, octave, False, rng, analysis)

		last_pitch = pitch

		tick_offset = round(cadenza.sequence_utils.jitter(rng, humanize * 40))
		velocity_offset = round(cadenza.sequence_utils.jitter(rng, humanize * 20))

		events.append(cadenza.events.make_event(
			max(start_tick, tick + tick_offset),
			min(duration - 5, end_tick - tick - 5),
			max(0, min(127, pitch)),
			velocity + velocity_offset,
			low = 45,
			high = 110
		))

		tick += duration

	return events


def _call_response (
	chord_tones: typing.List[str],
	scale_notes: typing.List[str],
	beats: float,
	octave: int,
	start_tick: int,
	velocity: int,
	rng: random.Random,
	analysis: cadenza.harmony.HarmonicAnalysis
) -> typing.List[cadenza.events.NoteEvent]:

	call_end = start_tick + (int(beats) // 2) * cadenza.constants.TICKS_PER_BEAT
	response_end = start_tick + cadenza.events.beats_to_ticks(beats)

	events: typing.List[cadenza.events.NoteEvent] = []

	def phrase (pool: typing.List[str], tick: int, end: int, phrase_velocity: int) -> None:

		while tick < end - dur.QUARTER:

			note = rng.choice(pool)
			duration = dur.QUARTER if rng.random() > 0.5 else dur.EIGHTH

			events.append(cadenza.events.make_event(tick, duration - 10, analysis.pitch_number(note, octave), phrase_velocity))

			tick += duration

	phrase(chord_tones, start_tick, call_end, velocity + 5)
	phrase(scale_notes, call_end, response_end, velocity - 5)

	# Resolve to the root.
	events.append(cadenza.events.make_event(
		response_end - dur.QUARTER,
		dur.QUARTER - 20,
		analysis.pitch_number(chord_tones[0], octave),
		velocity
	))

	return events


def melody (
	chord: str,
	scale: typing.Optional[str] = None,
	style: typing.Optional[str] = DEFAULT_STYLE,
	beats: float = 4,
	register: typing.Optional[str] = "mid",
	octave: typing.Optional[int] = None,
	start_tick: int = 0,
	velocity: int = cadenza.constants.velocity.LEAD_VELOCITY,
	humanize: float = 0.3,
	energy: float = 0.6,
	tension: float = 0.3,
	previous_note: typing.Optional[int] = None,
	rng: typing.Optional[random.Random] = None,
	analysis: typing.Optional[cadenza.harmony.HarmonicAnalysis] = None
) -> typing.List[cadenza.events.NoteEvent]:

	"""Generate a melody over one chord.

	Parameters:
		chord: Chord symbol.
		scale: Scale name such as ``"C major"`` or ``"D dorian"``. Without a
			scale the melody uses chord tones only.
		style: ``lyrical``, ``riff-based``, ``improvisatory`` or
			``call-response``.
		beats: Length of the chord in beats.
		register: ``low``, ``mid`` or ``high``; sets the octave unless
			``octave`` is given.
		octave: Explicit base octave.
		start_tick: Tick where the chord starts.
		velocity: Base velocity.
		humanize: Timing and velocity looseness 0-1.
		energy: 0-1; higher energy means shorter notes and fewer rests.
		tension: 0-1; chance of chromatic neighbours in ``improvisatory``.
		previous_note: Last pitch of the preceding chord, for ``lyrical``.
		rng: Random source (a fresh ``random.Random()`` if omitted).
		analysis: Harmonic analysis (the built-in one if omitted).
	"""

	rng = rng or random.Random()
	analysis = cadenza.harmony.resolve(analysis)

	if octave is None:
		octave = octave_for_register(register)

	chord_tones = analysis.chord_tones(chord)
	scale_notes = analysis.scale_tones(scale) if scale else list(chord_tones)

	if style == "riff-based":
		events = _riff(chord_tones, beats, octave, start_tick, velocity, humanize, rng, analysis)

	elif style == "improvisatory":
		events = _improvisatory(chord_tones, scale_notes, beats, octave, start_tick, velocity, humanize, energy, tension, rng, analysis)

	elif style == "call-response":
		events = _call_response(chord_tones, scale_notes, beats, octave, start_tick, velocity, rng, analysis)

	else:
		events = _lyrical(chord_tones, scale_notes, beats, octave, start_tick, velocity, humanize, energy, previous_note, rng, analysis)

	return cadenza.events.fit_to_span(events, start_tick + cadenza.events.beats_to_ticks(beats))


def melody_for_progression (
	chords: typing.Sequence[str],
	scale: typing.Optional[str],
	beats_per_chord: float,
	style: typing.Optional[str] = DEFAULT_STYLE,
	start_tick: int = 0,
	**options: typing.Any
) -> typing.List[cadenza.events.NoteEvent]:

	"""Generate a melody across a progression, carrying the last pitch forward.

	Remaining keyword arguments are passed to ``melody``.

	Example:
		```python
		events = cadenza.melody.melody_for_progression(
			["Dm7", "G7", "Cmaj7"],
			"C major",
			beats_per_chord = 4,
			style = "lyrical",
			rng = random.Random(11)
		)
		```
	"""

	events: typing.List[cadenza.events.NoteEvent] = []
	previous_note: typing.Optional[int] = None
	tick = start_tick

	for chord in chords:

		chord_events = melody(
			chord,
			scale = scale,
			style = style,
			beats = beats_per_chord,
			start_tick = tick,
			previous_note = previous_note,
			**options
		)

		events.extend(chord_events)

		if chord_events:
			last_pitch = chord_events[-1].pitch
			previous_note = last_pitch if isinstance(last_pitch, int) else None

		tick += cadenza.events.beats_to_ticks(beats_per_chord)

	return events
