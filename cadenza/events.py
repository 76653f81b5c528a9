"""Timed note events and the segment structure the engine produces.

Everything here is a plain value type. Generators build lists of
``NoteEvent`` objects; the orchestrator wraps them in ``Track`` objects and
assembles a ``MusicSegment``. Events are frozen: transforms such as
humanization return new events with ``dataclasses.replace`` rather than
editing them in place.
"""

import dataclasses
import typing

import cadenza.constants
import cadenza.constants.velocity


Pitch = typing.Union[int, str]

CurveType = typing.Literal["linear", "exponential", "step"]

FilterType = typing.Literal["lowpass", "highpass", "bandpass"]


@dataclasses.dataclass(frozen=True)
class NoteExpression:

	"""
	Optional per-note expression data.
	"""

	pitch_bend: typing.Optional[int] = None		# -8192..8191
	aftertouch: typing.Optional[int] = None		# 0-127


@dataclasses.dataclass(frozen=True)
class NoteEvent:

	"""
	A single note at a tick position.

	``pitch`` is either an absolute MIDI note number (0-127) or a note name
	with octave such as ``"C4"``.
	"""

	start_tick: int
	duration_ticks: int
	pitch: Pitch
	velocity: int
	expression: typing.Optional[NoteExpression] = None

	@property
	def end_tick (self) -> int:

		"""Tick at which the note releases."""

		return self.start_tick + self.duration_ticks


def make_event (start_tick: float, duration_ticks: float, pitch: Pitch, velocity: float, low: int = cadenza.constants.velocity.MIN_VELOCITY, high: int = cadenza.constants.velocity.MAX_VELOCITY) -> NoteEvent:

	"""
	Build a ``NoteEvent`` with rounded ticks and clamped values.

	Start ticks are floored at 0, durations at 1 tick and velocity is clamped
	into ``[low, high]``.
	"""

	return NoteEvent(
		start_tick = max(0, int(round(start_tick))),
		duration_ticks = max(1, int(round(duration_ticks))),
		pitch = pitch,
		velocity = cadenza.constants.velocity.clamp(velocity, low, high)
	)


def fit_to_span (events: typing.List[NoteEvent], span_end: int) -> typing.List[NoteEvent]:

	"""
	Trim events so none of them sounds past ``span_end``.

	Events that start at or after the boundary are dropped; the rest are
	shortened to end by it.
	"""

	fitted: typing.List[NoteEvent] = []

	for event in events:

		if event.start_tick >= span_end:
			continue

		start = max(0, event.start_tick)
		duration = max(1, min(event.duration_ticks, span_end - start))

		if start == event.start_tick and duration == event.duration_ticks:
			fitted.append(event)
		else:
			fitted.append(dataclasses.replace(event, start_tick=start, duration_ticks=duration))

	return fitted


@dataclasses.dataclass
class EffectSettings:

	"""
	Per-track effect settings for the playback collaborator.
	"""

	reverb: typing.Optional[float] = None			# wet 0-1
	delay: typing.Optional[float] = None			# wet 0-1
	filter_cutoff: typing.Optional[float] = None	# Hz
	filter_type: typing.Optional[FilterType] = None
	distortion: typing.Optional[float] = None		# 0-1
	pan: typing.Optional[float] = None				# -1 to 1
	volume: typing.Optional[float] = None			# 0-1


@dataclasses.dataclass
class Track:

	"""
	One voice of a segment: its role, instrument and note events.
	"""

	id: str
	role: str
	instrument: str
	events: typing.List[NoteEvent] = dataclasses.field(default_factory=list)
	effects: EffectSettings = dataclasses.field(default_factory=EffectSettings)


@dataclasses.dataclass(frozen=True)
class AutomationPoint:

	tick: int
	value: float
	curve: CurveType = "linear"


@dataclasses.dataclass
class AutomationLane:

	"""
	Automation for one parameter path, e.g. ``"filter.frequency"``.
	"""

	parameter: str
	points: typing.List[AutomationPoint] = dataclasses.field(default_factory=list)


@dataclasses.dataclass
class MusicSegment:

	"""
	A complete, time-resolved piece of music ready for playback or
	serialization. This is the only output type of the engine.
	"""

	id: str
	duration_ms: float
	tempo: float
	time_signature: typing.Any
	tracks: typing.List[Track] = dataclasses.field(default_factory=list)
	automation: typing.List[AutomationLane] = dataclasses.field(default_factory=list)
	processing: typing.Any = None

	def track (self, role: str) -> typing.Optional[Track]:

		"""Return the first track with the given role, if any."""

		for track in self.tracks:
			if track.role == role:
				return track

		return None


def beats_to_ticks (beats: float) -> int:

	"""Convert a beat count to ticks."""

	return int(round(beats * cadenza.constants.TICKS_PER_BEAT))


def ticks_to_seconds (ticks: float, bpm: float) -> float:

	"""Convert ticks to seconds at a tempo."""

	beats = ticks / cadenza.constants.TICKS_PER_BEAT
	return beats / (bpm / 60.0)


def seconds_to_ticks (seconds: float, bpm: float) -> int:

	"""Convert seconds to ticks at a tempo."""

	beats = seconds * (bpm / 60.0)
	return int(round(beats * cadenza.constants.TICKS_PER_BEAT))
