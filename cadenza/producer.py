"""The producer command: the high-level musical decision the engine renders.

A ``ProducerCommand`` says *what* to play (chords, key, tempo, which voices
are active and how busy they are, how energetic and loose the performance
should be) but never contains notes. The orchestrator turns it into a
``MusicSegment``.

Commands usually arrive as JSON or YAML from an upstream producer, so
``ProducerCommand.from_dict()`` accepts the camelCase wire keys and fills in
every optional field with its default. Missing required fields raise
``ValueError``; once a command is constructed the engine renders it without
raising.

Example:
	```python
	command = ProducerCommand.from_dict({
		"segmentId": "verse-1",
		"musical": {
			"chordProgression": [{"symbol": "Dm7"}, {"symbol": "G7"}],
			"key": {"root": "C", "mode": "major"},
			"timeSignature": {"beats": 4, "subdivision": 4},
			"tempo": {"bpm": 90},
			"harmonicRhythm": "medium",
		},
		"arrangement": {
			"activeVoices": [{"role": "bass", "activity": "normal"}],
			"sectionType": "verse",
			"density": "medium",
		},
		"expression": {
			"energy": 0.6, "tension": 0.3, "humanize": 0.3, "swing": 0.1,
			"dynamics": {"overall": "mf"},
		},
	})
	```
"""

import collections.abc
import dataclasses
import time
import typing


Mode = typing.Literal["major", "minor", "dorian", "mixolydian", "lydian", "phrygian", "locrian"]

HarmonicRhythm = typing.Literal["slow", "medium", "fast", "irregular"]

ChordColor = typing.Literal["bright", "dark", "tense", "open", "jazzy", "simple", "shell-voicings"]

VoiceRole = typing.Literal["lead", "harmony", "bass", "rhythm", "texture", "arpeggio"]

ActivityLevel = typing.Literal["silent", "sparse", "normal", "busy"]

Register = typing.Literal["low", "mid", "high"]

SectionType = typing.Literal["intro", "verse", "chorus", "bridge", "breakdown", "buildup", "drop", "outro"]

Density = typing.Literal["sparse", "light", "medium", "full", "dense"]

Dynamic = typing.Literal["pp", "p", "mp", "mf", "f", "ff"]

DynamicVariation = typing.Literal["static", "breathing", "building", "falling"]

# Pattern hints are grouped by the generator that understands them; any
# generator accepts any hint and falls back to its own default.
PatternHint = typing.Literal[
	# Bass
	"walking", "root-fifth", "octave-pulse", "syncopated",
	# Chords
	"sustained", "rhythmic-stabs", "arpeggiated", "shell-voicings",
	# Melody
	"lyrical", "riff-based", "call-response", "improvisatory",
	# Drums
	"four-on-floor", "boom-bap", "breakbeat", "minimal", "brushes",
]

VOICE_ROLES: typing.Tuple[str, ...] = typing.get_args(VoiceRole)
PATTERN_HINTS: typing.Tuple[str, ...] = typing.get_args(PatternHint)


@dataclasses.dataclass(frozen=True)
class ChordSpec:

	"""
	One chord of a progression: a symbol such as ``"Cmaj7"``, its length in
	beats and an optional voicing color.
	"""

	symbol: str
	duration: float = 4
	color: typing.Optional[ChordColor] = None


@dataclasses.dataclass(frozen=True)
class KeySignature:

	root: str = "C"
	mode: Mode = "major"

	def scale_name (self) -> str:

		"""Return the scale name understood by the harmonic analysis, e.g. ``"A minor"``."""

		return f"{self.root} {self.mode}"


@dataclasses.dataclass(frozen=True)
class TimeSignature:

	beats: int = 4
	subdivision: int = 4


@dataclasses.dataclass(frozen=True)
class TempoSpec:

	bpm: float = 120
	variation: typing.Optional[str] = None		# "steady", "subtle" or "expressive"


@dataclasses.dataclass
class MusicalParameters:

	chord_progression: typing.List[ChordSpec]
	key: KeySignature = dataclasses.field(default_factory=KeySignature)
	time_signature: TimeSignature = dataclasses.field(default_factory=TimeSignature)
	tempo: TempoSpec = dataclasses.field(default_factory=TempoSpec)
	harmonic_rhythm: HarmonicRhythm = "medium"


@dataclasses.dataclass(frozen=True)
class VoiceAssignment:

	"""
	One active voice: what it does, how busy it is and an optional hint
	steering the generator's algorithm.
	"""

	role: VoiceRole
	activity: ActivityLevel = "normal"
	pattern_hint: typing.Optional[PatternHint] = None
	register: typing.Optional[Register] = None


@dataclasses.dataclass(frozen=True)
class InterplaySpec:

	type: str						# "call-response", "unison" or "counterpoint"
	voices: typing.Tuple[str, str]


@dataclasses.dataclass
class ArrangementParameters:

	active_voices: typing.List[VoiceAssignment] = dataclasses.field(default_factory=list)
	section_type: SectionType = "verse"
	density: Density = "medium"
	interplay: typing.Optional[InterplaySpec] = None


@dataclasses.dataclass(frozen=True)
class Dynamics:

	overall: Dynamic = "mf"
	variation: DynamicVariation = "breathing"


@dataclasses.dataclass(frozen=True)
class LofiProcessing:

	vinyl_crackle: float = 0.0
	tape_wobble: float = 0.0
	bit_depth: typing.Optional[int] = None
	filter_cutoff: typing.Optional[float] = None


@dataclasses.dataclass(frozen=True)
class SpaceProcessing:

	reverb: float = 0.0
	delay: float = 0.0
	stereo_width: float = 0.0


@dataclasses.dataclass(frozen=True)
class ColorProcessing:

	warmth: float = 0.0
	brightness: float = 0.0
	presence: float = 0.0


@dataclasses.dataclass(frozen=True)
class ProcessingHints:

	"""
	Genre-specific processing hints, passed through untouched to the
	segment for the playback collaborator.
	"""

	lofi: typing.Optional[LofiProcessing] = None
	space: typing.Optional[SpaceProcessing] = None
	color: typing.Optional[ColorProcessing] = None


@dataclasses.dataclass
class ExpressionParameters:

	"""
	How the music is performed. ``energy``, ``tension``, ``humanize`` and
	``swing`` are all 0-1.
	"""

	energy: float = 0.6
	tension: float = 0.3
	dynamics: Dynamics = dataclasses.field(default_factory=Dynamics)
	humanize: float = 0.3
	swing: float = 0.0
	processing: typing.Optional[ProcessingHints] = None


@dataclasses.dataclass(frozen=True)
class TransitionParameters:

	type: str = "immediate"
	duration: float = 0
	intensity: typing.Optional[str] = None


@dataclasses.dataclass
class ProducerCommand:

	"""
	The contract between the producer layer and the music engine.
	"""

	segment_id: str
	musical: MusicalParameters
	arrangement: ArrangementParameters = dataclasses.field(default_factory=ArrangementParameters)
	expression: ExpressionParameters = dataclasses.field(default_factory=ExpressionParameters)
	transition: typing.Optional[TransitionParameters] = None
	version: str = "1.0"
	timestamp: float = 0.0


	@classmethod
	def from_dict (cls, data: typing.Mapping[str, typing.Any]) -> "ProducerCommand":

		"""Build a command from a JSON/YAML style mapping with camelCase keys.

		Parameters:
			data: Mapping shaped like the producer wire format.

		Returns:
			A fully populated ``ProducerCommand``.

		Raises:
			ValueError: If a required field is missing or the chord
				progression is empty.
		"""

		musical_data = _require(data, "musical", "command")
		progression_data = _require(musical_data, "chordProgression", "musical")

		if not progression_data:
			raise ValueError("musical.chordProgression must contain at least one chord")

		progression = [_chord_from_data(item) for item in progression_data]

		key_data = _require(musical_data, "key", "musical")
		tempo_data = _require(musical_data, "tempo", "musical")
		time_signature_data = _require(musical_data, "timeSignature", "musical")

		musical = MusicalParameters(
			chord_progression = progression,
			key = KeySignature(
				root = _require(key_data, "root", "musical.key"),
				mode = key_data.get("mode", "major")
			),
			time_signature = TimeSignature(
				beats = int(_require(time_signature_data, "beats", "musical.timeSignature")),
				subdivision = int(_require(time_signature_data, "subdivision", "musical.timeSignature"))
			),
			tempo = TempoSpec(
				bpm = float(_require(tempo_data, "bpm", "musical.tempo")),
				variation = tempo_data.get("variation")
			),
			harmonic_rhythm = _require(musical_data, "harmonicRhythm", "musical")
		)

		arrangement_data = _require(data, "arrangement", "command")
		interplay_data = arrangement_data.get("interplay")

		arrangement = ArrangementParameters(
			active_voices = [_voice_from_data(item) for item in _require(arrangement_data, "activeVoices", "arrangement")],
			section_type = _require(arrangement_data, "sectionType", "arrangement"),
			density = _require(arrangement_data, "density", "arrangement"),
			interplay = InterplaySpec(
				type = _require(interplay_data, "type", "arrangement.interplay"),
				voices = tuple(_require(interplay_data, "voices", "arrangement.interplay"))
			) if interplay_data else None
		)

		expression_data = _require(data, "expression", "command")
		dynamics_data = _require(expression_data, "dynamics", "expression")

		expression = ExpressionParameters(
			energy = float(_require(expression_data, "energy", "expression")),
			tension = float(_require(expression_data, "tension", "expression")),
			dynamics = Dynamics(
				overall = _require(dynamics_data, "overall", "expression.dynamics"),
				variation = dynamics_data.get("variation", "breathing")
			),
			humanize = float(_require(expression_data, "humanize", "expression")),
			swing = float(_require(expression_data, "swing", "expression")),
			processing = _processing_from_data(expression_data.get("processing"))
		)

		transition_data = data.get("transition")

		transition = TransitionParameters(
			type = transition_data.get("type", "immediate"),
			duration = float(transition_data.get("duration", 0)),
			intensity = transition_data.get("intensity")
		) if transition_data else None

		return cls(
			segment_id = str(data.get("segmentId", "segment")),
			musical = musical,
			arrangement = arrangement,
			expression = expression,
			transition = transition,
			version = str(data.get("version", "1.0")),
			timestamp = float(data.get("timestamp", time.time() * 1000))
		)


def _require (data: typing.Mapping[str, typing.Any], key: str, where: str) -> typing.Any:

	"""Return ``data[key]`` or raise a ``ValueError`` naming the missing field."""

	if not isinstance(data, collections.abc.Mapping) or key not in data or data[key] is None:
		raise ValueError(f"Producer command is missing required field {where}.{key}")

	return data[key]


def _chord_from_data (item: typing.Any) -> ChordSpec:

	"""Accept either a bare chord symbol or a chord mapping."""

	if isinstance(item, str):
		return ChordSpec(symbol=item)

	return ChordSpec(
		symbol = str(_require(item, "symbol", "chordProgression[]")),
		duration = float(item.get("duration", 4)),
		color = item.get("color")
	)


def _voice_from_data (item: typing.Mapping[str, typing.Any]) -> VoiceAssignment:

	return VoiceAssignment(
		role = _require(item, "role", "activeVoices[]"),
		activity = item.get("activity", "normal"),
		pattern_hint = item.get("patternHint"),
		register = item.get("register")
	)


def _processing_from_data (data: typing.Optional[typing.Mapping[str, typing.Any]]) -> typing.Optional[ProcessingHints]:

	if not data:
		return None

	lofi = data.get("lofi")
	space = data.get("space")
	color = data.get("color")

	return ProcessingHints(
		lofi = LofiProcessing(
			vinyl_crackle = float(lofi.get("vinylCrackle", 0.0)),
			tape_wobble = float(lofi.get("tapeWobble", 0.0)),
			bit_depth = lofi.get("bitDepth"),
			filter_cutoff = lofi.get("filterCutoff")
		) if lofi else None,
		space = SpaceProcessing(
			reverb = float(space.get("reverb", 0.0)),
			delay = float(space.get("delay", 0.0)),
			stereo_width = float(space.get("stereoWidth", 0.0))
		) if space else None,
		color = ColorProcessing(
			warmth = float(color.get("warmth", 0.0)),
			brightness = float(color.get("brightness", 0.0)),
			presence = float(color.get("presence", 0.0))
		) if color else None
	)
