"""Chord accompaniment patterns for the harmony and texture voices.

Each chord is voiced with ``cadenza.voicings`` and then played in one of
three rhythms:

- ``sustained`` - every note held for the whole chord, less a 20-tick gap
- ``rhythmic-stabs`` - short eighth-note hits; beats 0 and 2 accented
- ``shell-voicings`` - Charleston-style comping with a long first hit and a
  softer, looser feel

Unknown patterns are played sustained. Across a progression the previous
voicing is handed explicitly from one chord to the next so the parts
voice-lead.
"""

import random
import typing

import cadenza.constants
import cadenza.constants.durations
import cadenza.constants.velocity
import cadenza.events
import cadenza.harmony
import cadenza.producer
import cadenza.sequence_utils
import cadenza.voicings


DEFAULT_PATTERN = "sustained"

SUSTAIN_GAP = 20

# Comping never plays above this velocity.
COMPING_CEILING = 100

ChordItem = typing.Union[str, cadenza.producer.ChordSpec]


def _pitches (voicing: cadenza.voicings.Voicing, analysis: cadenza.harmony.HarmonicAnalysis) -> typing.List[int]:

	return [analysis.pitch_number(note) for note in voicing]


def sustained (
	pitches: typing.List[int],
	beats: float,
	start_tick: int,
	velocity: int,
	humanize: float,
	rng: random.Random
) -> typing.List[cadenza.events.NoteEvent]:

	"""Hold every pitch for the chord's length minus a short gap."""

	duration = cadenza.events.beats_to_ticks(beats) - SUSTAIN_GAP
	events: typing.List[cadenza.events.NoteEvent] = []

	for pitch in pitches:

		velocity_offset = round(cadenza.sequence_utils.jitter(rng, humanize * 10))
		tick_offset = round(cadenza.sequence_utils.jitter(rng, humanize * 20))

		events.append(cadenza.events.make_event(
			start_tick + tick_offset,
			duration,
			pitch,
			velocity + velocity_offset,
			low = cadenza.constants.velocity.AUDIBLE_FLOOR
		))

	return events


def rhythmic_stabs (
	pitches: typing.List[int],
	beats: float,
	start_tick: int,
	velocity: int,
	humanize: float,
	energy: float,
	rng: random.Random
) -> typing.List[cadenza.events.NoteEvent]:

	"""Short stabs on beats 0 and 2, adding the off-eighths of beats 1 and 3 at higher energy."""

	hit_beats = [0, 1.5, 2, 3.5] if energy > 0.6 else [0, 2]
	events: typing.List[cadenza.events.NoteEvent] = []

	for beat in hit_beats:

		if beat >= beats:
			continue

		tick = start_tick + cadenza.events.beats_to_ticks(beat)
		base_velocity = velocity + 15 if beat in (0, 2) else velocity - 10

		for pitch in pitches:

			velocity_offset = round(cadenza.sequence_utils.jitter(rng, humanize * 15))
			tick_offset = round(cadenza.sequence_utils.jitter(rng, humanize * 15))

			events.append(cadenza.events.make_event(
				tick + tick_offset,
				cadenza.constants.durations.EIGHTH,
				pitch,
				base_velocity + velocity_offset,
				low = cadenza.constants.velocity.AUDIBLE_FLOOR
			))

	return events


def shell_comping (
	pitches: typing.List[int],
	beats: float,
	start_tick: int,
	velocity: int,
	humanize: float,
	energy: float,
	rng: random.Random
) -> typing.List[cadenza.events.NoteEvent]:

	"""Charleston comping: beat 0 (dotted quarter) and the and-of-two, busier above energy 0.7."""

	hit_beats = [0, 1.5, 2.5, 3] if energy > 0.7 else [0, 1.5]
	events: typing.List[cadenza.events.NoteEvent] = []

	for beat in hit_beats:

		if beat >= beats:
			continue

		tick = start_tick + cadenza.events.beats_to_ticks(beat)
		duration = cadenza.constants.durations.DOTTED_QUARTER if beat == 0 else cadenza.constants.durations.EIGHTH

		for pitch in pitches:

			velocity_offset = round(cadenza.sequence_utils.jitter(rng, humanize * 20))
			tick_offset = round(cadenza.sequence_utils.jitter(rng, humanize * 25))

			events.append(cadenza.events.make_event(
				tick + tick_offset,
				duration,
				pitch,
				velocity + velocity_offset,
				low = cadenza.constants.velocity.AUDIBLE_FLOOR,
				high = COMPING_CEILING
			))

	return events


def default_color (pattern: typing.Optional[str]) -> str:

	"""Shell voicings for shell comping, triads for everything else."""

	return "shell-voicings" if pattern == "shell-voicings" else cadenza.voicings.DEFAULT_COLOR


def play_voicing (
	voicing: cadenza.voicings.Voicing,
	pattern: typing.Optional[str] = DEFAULT_PATTERN,
	beats: float = 4,
	start_tick: int = 0,
	velocity: int = cadenza.constants.velocity.DEFAULT_CHORD_VELOCITY,
	humanize: float = 0.2,
	energy: float = 0.6,
	rng: typing.Optional[random.Random] = None,
	analysis: typing.Optional[cadenza.harmony.HarmonicAnalysis] = None
) -> typing.List[cadenza.events.NoteEvent]:

	"""Render an already-chosen voicing in a comping pattern, trimmed to the chord's span."""

	rng = rng or random.Random()
	pitches = _pitches(voicing, cadenza.harmony.resolve(analysis))

	if pattern == "rhythmic-stabs":
		events = rhythmic_stabs(pitches, beats, start_tick, velocity, humanize, energy, rng)

	elif pattern == "shell-voicings":
		events = shell_comping(pitches, beats, start_tick, velocity, humanize, energy, rng)

	else:
		events = sustained(pitches, beats, start_tick, velocity, humanize, rng)

	return cadenza.events.fit_to_span(events, start_tick + cadenza.events.beats_to_ticks(beats))


def chord_events (
	chord: str,
	pattern: typing.Optional[str] = DEFAULT_PATTERN,
	beats: float = 4,
	start_tick: int = 0,
	velocity: int = cadenza.constants.velocity.DEFAULT_CHORD_VELOCITY,
	humanize: float = 0.2,
	energy: float = 0.6,
	color: typing.Optional[str] = None,
	previous_voicing: typing.Optional[cadenza.voicings.Voicing] = None,
	octave: int = cadenza.voicings.DEFAULT_OCTAVE,
	voice_count: int = cadenza.voicings.DEFAULT_VOICE_COUNT,
	rng: typing.Optional[random.Random] = None,
	analysis: typing.Optional[cadenza.harmony.HarmonicAnalysis] = None
) -> typing.List[cadenza.events.NoteEvent]:

	"""Voice one chord and play it in a pattern.

	Example:
		```python
		events = cadenza.comping.chord_events("Cmaj7", pattern="sustained", humanize=0)
		# three notes (C4, E4, G5), each 1900 ticks long
		```
	"""

	voicing = cadenza.voicings.voice(chord, color or default_color(pattern), previous_voicing, octave, voice_count, analysis)

	return play_voicing(voicing, pattern, beats, start_tick, velocity, humanize, energy, rng, analysis)


def _symbol_and_color (item: ChordItem) -> typing.Tuple[str, typing.Optional[str]]:

	if isinstance(item, cadenza.producer.ChordSpec):
		return item.symbol, item.color

	return item, None


def chords_for_progression (
	chords: typing.Sequence[ChordItem],
	beats_per_chord: float,
	pattern: typing.Optional[str] = DEFAULT_PATTERN,
	start_tick: int = 0,
	velocity: int = cadenza.constants.velocity.DEFAULT_CHORD_VELOCITY,
	humanize: float = 0.2,
	energy: float = 0.6,
	color: typing.Optional[str] = None,
	octave: int = cadenza.voicings.DEFAULT_OCTAVE,
	voice_count: int = cadenza.voicings.DEFAULT_VOICE_COUNT,
	rng: typing.Optional[random.Random] = None,
	analysis: typing.Optional[cadenza.harmony.HarmonicAnalysis] = None
) -> typing.List[cadenza.events.NoteEvent]:

	"""Play a progression, voice-leading each chord from the one before.

	Chords may be symbols or ``ChordSpec`` objects. A chord's own ``color``
	wins over the ``color`` argument, which wins over the pattern's default.
	"""

	rng = rng or random.Random()
	events: typing.List[cadenza.events.NoteEvent] = []
	previous_voicing: typing.Optional[cadenza.voicings.Voicing] = None
	tick = start_tick

	for item in chords:

		symbol, chord_color = _symbol_and_color(item)
		voicing = cadenza.voicings.voice(symbol, chord_color or color or default_color(pattern), previous_voicing, octave, voice_count, analysis)

		events.extend(play_voicing(voicing, pattern, beats_per_chord, tick, velocity, humanize, energy, rng, analysis))

		previous_voicing = voicing
		tick += cadenza.events.beats_to_ticks(beats_per_chord)

	return events


def texture_for_progression (
	chords: typing.Sequence[ChordItem],
	beats_per_chord: float,
	start_tick: int = 0,
	velocity: int = cadenza.constants.velocity.TEXTURE_VELOCITY,
	humanize: float = 0.2,
	octave: int = 5,
	rng: typing.Optional[random.Random] = None,
	analysis: typing.Optional[cadenza.harmony.HarmonicAnalysis] = None
) -> typing.List[cadenza.events.NoteEvent]:

	"""Long sustained pads, each held across two chords.

	A pad is voiced on every other chord and lasts two chord spans (one for a
	final odd chord), so nothing sounds past the end of the progression.
	"""

	rng = rng or random.Random()
	events: typing.List[cadenza.events.NoteEvent] = []
	previous_voicing: typing.Optional[cadenza.voicings.Voicing] = None

	for index in range(0, len(chords), 2):

		symbol, chord_color = _symbol_and_color(chords[index])
		span_chords = min(2, len(chords) - index)
		tick = start_tick + cadenza.events.beats_to_ticks(index * beats_per_chord)

		voicing = cadenza.voicings.voice(symbol, chord_color or cadenza.voicings.DEFAULT_COLOR, previous_voicing, octave, analysis=analysis)

		events.extend(play_voicing(voicing, DEFAULT_PATTERN, span_chords * beats_per_chord, tick, velocity, humanize, 0.0, rng, analysis))

		previous_voicing = voicing

	return events
