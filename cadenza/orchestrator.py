"""Turn a producer command into a complete music segment.

The orchestrator works out the segment length from the harmonic rhythm,
asks the right generator for each active voice, humanizes the result and
wraps it in tracks styled for the genre:

==========  ===============================================================
Role        Generator
==========  ===============================================================
rhythm      ``cadenza.drums`` - enough bars to cover the segment
bass        ``cadenza.bass`` - octave 2
harmony     ``cadenza.comping`` - octave 4, velocity 65
texture     ``cadenza.comping`` pads - octave 5, velocity 45, two chords each
arpeggio    ``cadenza.arpeggio`` - up-down, sixteenths above energy 0.6
lead        ``cadenza.melody`` - octave 5 for a high register, else 4
==========  ===============================================================

Every voice draws from its own ``random.Random`` derived from a master
generator, so a fixed ``seed`` reproduces a segment exactly and adding or
removing one voice does not change the others.

Example:
	```python
	import cadenza.orchestrator

	command = cadenza.orchestrator.create_test_command(voices=["rhythm", "bass", "harmony"])
	segment = cadenza.orchestrator.Orchestrator(genre="jazz", seed=42).process(command)

	for track in segment.tracks:
		print(track.id, len(track.events))
	```
"""

import logging
import math
import random
import time
import typing

import cadenza.arpeggio
import cadenza.bass
import cadenza.comping
import cadenza.constants
import cadenza.constants.velocity
import cadenza.drums
import cadenza.events
import cadenza.harmony
import cadenza.humanize
import cadenza.melody
import cadenza.producer
import cadenza.styling


logger = logging.getLogger(__name__)


BEATS_PER_CHORD: typing.Dict[str, int] = {
	"slow": 8,
	"medium": 4,
	"fast": 2,
	"irregular": 4,
}

DEFAULT_PATTERNS: typing.Dict[str, str] = {
	"lead": "lyrical",
	"harmony": "sustained",
	"bass": "root-fifth",
	"rhythm": "boom-bap",
	"texture": "sustained",
	"arpeggio": "arpeggiated",
}

CHORD_PATTERNS = ("sustained", "rhythmic-stabs", "shell-voicings")

BASS_OCTAVE = 2
HARMONY_OCTAVE = 4
TEXTURE_OCTAVE = 5
ARPEGGIO_OCTAVE = 4

# Humanize velocity looseness relative to timing looseness.
VELOCITY_HUMANIZE_SCALE = 0.7


def beats_per_chord (harmonic_rhythm: str) -> int:

	"""Beats each chord lasts for a harmonic rhythm; 4 when unknown."""

	return BEATS_PER_CHORD.get(harmonic_rhythm, 4)


def chord_pattern (hint: typing.Optional[str]) -> str:

	"""Map any pattern hint onto one of the comping patterns."""

	return hint if hint in CHORD_PATTERNS else "sustained"


class VoiceContext:

	"""
	What a voice generator needs to know about the segment.
	"""

	def __init__ (
		self,
		voice: cadenza.producer.VoiceAssignment,
		command: cadenza.producer.ProducerCommand,
		beats_per_chord: int,
		rng: random.Random,
		analysis: cadenza.harmony.HarmonicAnalysis
	) -> None:

		self.voice = voice
		self.command = command
		self.beats_per_chord = beats_per_chord
		self.rng = rng
		self.analysis = analysis

		self.chords: typing.List[cadenza.producer.ChordSpec] = list(command.musical.chord_progression)
		self.symbols: typing.List[str] = [chord.symbol for chord in self.chords]
		self.total_beats = len(self.chords) * beats_per_chord
		self.pattern_hint: str = voice.pattern_hint or DEFAULT_PATTERNS.get(voice.role, "")

	@property
	def expression (self) -> cadenza.producer.ExpressionParameters:

		return self.command.expression

	@property
	def total_ticks (self) -> int:

		return self.total_beats * cadenza.constants.TICKS_PER_BEAT


def _rhythm (context: VoiceContext) -> typing.List[cadenza.events.NoteEvent]:

	events = cadenza.drums.generate(
		pattern_hint = context.pattern_hint,
		bars = math.ceil(context.total_beats / 4),
		energy = context.expression.energy,
		humanize = context.expression.humanize,
		swing = context.expression.swing,
		rng = context.rng
	)

	# The last bar may run past a segment that is not a whole number of bars.
	return [event for event in events if event.start_tick < context.total_ticks]


def _bass (context: VoiceContext) -> typing.List[cadenza.events.NoteEvent]:

	return cadenza.bass.bass_for_progression(
		context.symbols,
		context.beats_per_chord,
		pattern = context.pattern_hint,
		swing = context.expression.swing,
		humanize = context.expression.humanize,
		energy = context.expression.energy,
		octave = BASS_OCTAVE,
		rng = context.rng,
		analysis = context.analysis
	)


def _harmony (context: VoiceContext) -> typing.List[cadenza.events.NoteEvent]:

	return cadenza.comping.chords_for_progression(
		context.chords,
		context.beats_per_chord,
		pattern = chord_pattern(context.pattern_hint),
		velocity = cadenza.constants.velocity.HARMONY_VELOCITY,
		humanize = context.expression.humanize,
		energy = context.expression.energy,
		octave = HARMONY_OCTAVE,
		rng = context.rng,
		analysis = context.analysis
	)


def _texture (context: VoiceContext) -> typing.List[cadenza.events.NoteEvent]:

	return cadenza.comping.texture_for_progression(
		context.chords,
		context.beats_per_chord,
		velocity = cadenza.constants.velocity.TEXTURE_VELOCITY,
		humanize = context.expression.humanize,
		octave = TEXTURE_OCTAVE,
		rng = context.rng,
		analysis = context.analysis
	)


def _arpeggio (context: VoiceContext) -> typing.List[cadenza.events.NoteEvent]:

	return cadenza.arpeggio.arpeggio_for_progression(
		context.symbols,
		context.beats_per_chord,
		pattern = "up-down",
		rate = "sixteenth" if context.expression.energy > 0.6 else "eighth",
		octave = ARPEGGIO_OCTAVE,
		velocity = cadenza.constants.velocity.ARPEGGIO_VELOCITY,
		humanize = context.expression.humanize,
		rng = context.rng,
		analysis = context.analysis
	)


def _lead (context: VoiceContext) -> typing.List[cadenza.events.NoteEvent]:

	return cadenza.melody.melody_for_progression(
		context.symbols,
		context.command.musical.key.scale_name(),
		context.beats_per_chord,
		style = context.pattern_hint,
		octave = 5 if context.voice.register == "high" else 4,
		velocity = cadenza.constants.velocity.LEAD_VELOCITY,
		humanize = context.expression.humanize,
		energy = context.expression.energy,
		tension = context.expression.tension,
		rng = context.rng,
		analysis = context.analysis
	)


VOICE_GENERATORS: typing.Dict[str, typing.Callable[[VoiceContext], typing.List[cadenza.events.NoteEvent]]] = {
	"rhythm": _rhythm,
	"bass": _bass,
	"harmony": _harmony,
	"texture": _texture,
	"arpeggio": _arpeggio,
	"lead": _lead,
}


class Orchestrator:

	"""Render producer commands into music segments.

	Parameters:
		genre: Chooses instruments and effects (``lofi``, ``jazz``,
			``house``, ``techno`` or ``ambient``).
		seed: When set, every ``process()`` call with the same command
			produces the same segment.
		analysis: Harmonic analysis for all voices (the built-in one if
			omitted).
	"""

	def __init__ (
		self,
		genre: str = cadenza.styling.DEFAULT_GENRE,
		seed: typing.Optional[int] = None,
		analysis: typing.Optional[cadenza.harmony.HarmonicAnalysis] = None
	) -> None:

		self.genre = genre
		self.seed = seed
		self.analysis = cadenza.harmony.resolve(analysis)

	def set_genre (self, genre: str) -> None:

		"""Switch the genre used for subsequent segments."""

		self.genre = genre

	def process (self, command: cadenza.producer.ProducerCommand) -> cadenza.events.MusicSegment:

		"""Render one command into a ``MusicSegment``.

		Silent voices and voices that produce no events get no track. A
		command with no active voices still yields a segment with its
		duration set.
		"""

		musical = command.musical
		expression = command.expression

		chord_beats = beats_per_chord(musical.harmonic_rhythm)
		total_beats = len(musical.chord_progression) * chord_beats
		total_ticks = total_beats * cadenza.constants.TICKS_PER_BEAT
		duration_ms = total_beats / (musical.tempo.bpm / 60) * 1000

		master = random.Random(self.seed) if self.seed is not None else random.Random()
		tracks: typing.List[cadenza.events.Track] = []

		for voice in command.arrangement.active_voices:

			# One stream per voice, drawn whether or not the voice plays.
			voice_rng = random.Random(master.randint(0, 2 ** 63))

			if voice.activity == "silent":
				continue

			generator = VOICE_GENERATORS.get(voice.role)

			if generator is None:
				logger.debug(f"No generator for voice role {voice.role!r}")
				continue

			context = VoiceContext(voice, command, chord_beats, voice_rng, self.analysis)
			events = generator(context)

			if not events:
				logger.debug(f"Voice {voice.role} produced no events")
				continue

			events = cadenza.humanize.full_humanize(
				events,
				timing = expression.humanize,
				velocity = expression.humanize * VELOCITY_HUMANIZE_SCALE,
				swing = expression.swing,
				accent_downbeats = voice.role == "rhythm",
				rng = voice_rng
			)

			events = cadenza.events.fit_to_span(events, total_ticks)

			if not events:
				logger.debug(f"Voice {voice.role} has no events inside the segment")
				continue

			events.sort(key=lambda event: event.start_tick)

			track = cadenza.events.Track(
				id = f"track-{voice.role}",
				role = voice.role,
				instrument = cadenza.styling.instrument_for(voice.role, self.genre),
				events = events,
				effects = cadenza.styling.effects_for(self.genre, voice.role)
			)

			logger.debug(f"{track.id}: {len(events)} events ({track.instrument}, {context.pattern_hint})")
			tracks.append(track)

		logger.info(f"Segment {command.segment_id}: {len(tracks)} tracks, {total_beats} beats at {musical.tempo.bpm:g} BPM ({self.genre})")

		return cadenza.events.MusicSegment(
			id = command.segment_id,
			duration_ms = duration_ms,
			tempo = musical.tempo.bpm,
			time_signature = musical.time_signature,
			tracks = tracks,
			automation = [],
			processing = expression.processing
		)


def generate_segment (
	command: cadenza.producer.ProducerCommand,
	genre: str = cadenza.styling.DEFAULT_GENRE,
	seed: typing.Optional[int] = None
) -> cadenza.events.MusicSegment:

	"""Render a command with a one-off ``Orchestrator``."""

	return Orchestrator(genre=genre, seed=seed).process(command)


def create_test_command (
	chords: typing.Optional[typing.Sequence[str]] = None,
	bpm: float = 90,
	key: str = "C",
	mode: str = "major",
	energy: float = 0.6,
	voices: typing.Optional[typing.Sequence[str]] = None,
	swing: float = 0.15
) -> cadenza.producer.ProducerCommand:

	"""Build a simple command for auditioning and tests.

	Defaults to ii-V-I-vi in C (``Dm7 G7 Cmaj7 Am7``) at 90 BPM with rhythm,
	bass, harmony and lead voices at normal activity.
	"""

	chords = list(chords) if chords is not None else ["Dm7", "G7", "Cmaj7", "Am7"]
	voices = list(voices) if voices is not None else ["rhythm", "bass", "harmony", "lead"]
	now_ms = time.time() * 1000

	return cadenza.producer.ProducerCommand(
		segment_id = f"test-{int(now_ms)}",
		timestamp = now_ms,
		musical = cadenza.producer.MusicalParameters(
			chord_progression = [cadenza.producer.ChordSpec(symbol=chord, duration=4) for chord in chords],
			key = cadenza.producer.KeySignature(root=key, mode=mode),
			time_signature = cadenza.producer.TimeSignature(beats=4, subdivision=4),
			tempo = cadenza.producer.TempoSpec(bpm=bpm),
			harmonic_rhythm = "medium"
		),
		arrangement = cadenza.producer.ArrangementParameters(
			active_voices = [cadenza.producer.VoiceAssignment(role=role, activity="normal") for role in voices],
			section_type = "verse",
			density = "medium"
		),
		expression = cadenza.producer.ExpressionParameters(
			energy = energy,
			tension = 0.3,
			dynamics = cadenza.producer.Dynamics(overall="mf", variation="breathing"),
			humanize = 0.3,
			swing = swing
		)
	)


def preset_command (genre: str, voices: typing.Optional[typing.Sequence[str]] = None) -> cadenza.producer.ProducerCommand:

	"""Build a test command from a genre preset (lofi for unknown genres)."""

	preset = cadenza.styling.GENRE_PRESETS.get(genre, cadenza.styling.GENRE_PRESETS[cadenza.styling.DEFAULT_GENRE])

	return create_test_command(
		preset.chords,
		bpm = preset.bpm,
		key = preset.key,
		mode = preset.mode,
		energy = preset.energy,
		voices = voices,
		swing = preset.swing
	)
