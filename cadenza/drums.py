"""Step-sequenced drum patterns.

A ``DrumPattern`` is one bar of sixteen sixteenth-note steps per lane. Each
lane is named after a key of ``cadenza.constants.gm_drums.DRUM_MAP`` and
holds sixteen velocities, where 0 means no hit. ``generate()`` repeats the
pattern for a number of bars and applies energy scaling, ghost notes, swing
and light humanization.

Patterns are chosen either by name or from a pattern hint. A hint maps to
one to three candidate patterns and the generator picks one uniformly with
its ``rng``. Every hint in the producer vocabulary has a mapping, including
the bass, chord and melody hints; anything else falls back to boom-bap.

Example:
	```python
	import random
	import cadenza.drums

	events = cadenza.drums.generate(
		pattern_hint = "four-on-floor",
		bars = 4,
		energy = 0.8,
		rng = random.Random(1)
	)
	```
"""

import dataclasses
import logging
import random
import typing

import cadenza.constants
import cadenza.constants.gm_drums
import cadenza.events


logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class DrumPattern:

	"""
	One bar of drum hits: lane name → sixteen step velocities.
	"""

	name: str
	sounds: typing.Dict[str, typing.List[int]]
	swing: float = 0.0


def _steps (velocity: int, positions: typing.Iterable[int]) -> typing.List[int]:

	"""A sixteen-step lane with ``velocity`` at each of ``positions``."""

	lane = [0] * cadenza.constants.STEPS_PER_BAR

	for position in positions:
		lane[position] = velocity

	return lane


def _alternating (on: int, off: int) -> typing.List[int]:

	"""A sixteen-step lane alternating between two velocities, starting on ``on``."""

	return [on if step % 2 == 0 else off for step in range(cadenza.constants.STEPS_PER_BAR)]


_EVEN_STEPS = range(0, 16, 2)
_QUARTERS = (0, 4, 8, 12)
_BACKBEAT = (4, 12)
_OFFBEAT_EIGHTHS = (2, 6, 10, 14)


PATTERNS: typing.Dict[str, DrumPattern] = {

	# Lo-fi / hip-hop
	"boom-bap": DrumPattern(
		name = "Boom Bap",
		sounds = {
			"kick": [100, 0, 0, 0, 0, 0, 0, 0, 0, 0, 80, 0, 0, 0, 0, 0],
			"snare": _steps(100, _BACKBEAT),
			"closed_hat": _steps(70, _EVEN_STEPS),
		},
		swing = 0.15
	),

	"boom-bap-busy": DrumPattern(
		name = "Boom Bap Busy",
		sounds = {
			"kick": [100, 0, 0, 0, 0, 0, 70, 0, 0, 0, 90, 0, 0, 0, 0, 0],
			"snare": [0, 0, 0, 0, 100, 0, 0, 40, 0, 0, 0, 0, 100, 0, 0, 50],
			"closed_hat": _alternating(80, 40),
			"open_hat": _steps(60, [14]),
		},
		swing = 0.2
	),

	"lofi-lazy": DrumPattern(
		name = "Lo-fi Lazy",
		sounds = {
			"kick": [90, 0, 0, 0, 0, 0, 0, 0, 0, 0, 70, 0, 0, 0, 0, 0],
			"snare": _steps(80, _BACKBEAT),
			"closed_hat": _steps(50, _EVEN_STEPS),
		},
		swing = 0.25
	),

	# House
	"four-on-floor": DrumPattern(
		name = "Four on Floor",
		sounds = {
			"kick": _steps(110, _QUARTERS),
			"snare": _steps(100, _BACKBEAT),
			"closed_hat": _steps(90, _OFFBEAT_EIGHTHS),
			"open_hat": _steps(70, [7, 15]),
		}
	),

	"house-groove": DrumPattern(
		name = "House Groove",
		sounds = {
			"kick": _steps(110, _QUARTERS),
			"clap": _steps(100, _BACKBEAT),
			"closed_hat": _alternating(80, 50),
			"open_hat": _steps(70, [15]),
			"shaker": _alternating(40, 40),
		}
	),

	# Techno
	"minimal": DrumPattern(
		name = "Minimal Techno",
		sounds = {
			"kick": _steps(110, _QUARTERS),
			"closed_hat": _steps(70, _OFFBEAT_EIGHTHS),
		}
	),

	"techno-driving": DrumPattern(
		name = "Driving Techno",
		sounds = {
			"kick": _steps(120, _QUARTERS),
			"snare": [0, 0, 0, 0, 90, 0, 0, 0, 0, 0, 0, 0, 90, 0, 0, 50],
			"closed_hat": _alternating(90, 60),
			"ride": _steps(60, [8]),
		}
	),

	# Breakbeat
	"breakbeat": DrumPattern(
		name = "Breakbeat",
		sounds = {
			"kick": [100, 0, 0, 0, 0, 0, 80, 0, 0, 0, 100, 0, 0, 0, 0, 0],
			"snare": [0, 0, 0, 0, 100, 0, 0, 80, 0, 0, 0, 0, 100, 0, 0, 0],
			"closed_hat": _alternating(70, 50),
		},
		swing = 0.1
	),

	# Jazz
	"brushes": DrumPattern(
		name = "Jazz Brushes",
		sounds = {
			"kick": [70, 0, 0, 0, 0, 0, 50, 0, 0, 0, 0, 0, 60, 0, 0, 0],
			"snare_rim": [0, 0, 50, 0, 70, 0, 50, 0, 0, 0, 50, 0, 70, 0, 50, 0],
			"ride": [80, 0, 60, 80, 0, 60, 80, 0, 60, 80, 0, 60, 80, 0, 60, 0],
		},
		swing = 0.33
	),

	"jazz-swing": DrumPattern(
		name = "Jazz Swing",
		sounds = {
			"kick": [70, 0, 0, 0, 0, 0, 0, 0, 60, 0, 0, 0, 0, 0, 50, 0],
			"snare": [0, 0, 0, 0, 60, 0, 0, 0, 0, 0, 0, 0, 60, 0, 0, 40],
			"ride": [90, 0, 70, 90, 0, 70, 90, 0, 70, 90, 0, 70, 90, 0, 70, 0],
			"pedal_hat": _steps(50, _BACKBEAT),
		},
		swing = 0.33
	),

	# Ambient
	"ambient-pulse": DrumPattern(
		name = "Ambient Pulse",
		sounds = {
			"kick": _steps(50, [0]),
		}
	),

	"ambient-none": DrumPattern(
		name = "No Drums",
		sounds = {}
	),
}


DEFAULT_PATTERN = "boom-bap"

HINT_TO_PATTERNS: typing.Dict[str, typing.List[str]] = {
	"boom-bap": ["boom-bap", "boom-bap-busy", "lofi-lazy"],
	"four-on-floor": ["four-on-floor", "house-groove"],
	"minimal": ["minimal", "techno-driving"],
	"breakbeat": ["breakbeat"],
	"brushes": ["brushes", "jazz-swing"],
	# Hints meant for other voices still pick a drum feel that suits them.
	"walking": ["boom-bap"],
	"root-fifth": ["boom-bap"],
	"octave-pulse": ["four-on-floor"],
	"syncopated": ["breakbeat"],
	"sustained": ["ambient-pulse"],
	"rhythmic-stabs": ["four-on-floor"],
	"arpeggiated": ["minimal"],
	"shell-voicings": ["brushes"],
	"lyrical": ["boom-bap"],
	"riff-based": ["breakbeat"],
	"call-response": ["jazz-swing"],
	"improvisatory": ["brushes"],
}

GENRE_PATTERNS: typing.Dict[str, typing.List[str]] = {
	"lofi": ["boom-bap", "boom-bap-busy", "lofi-lazy"],
	"house": ["four-on-floor", "house-groove"],
	"techno": ["minimal", "techno-driving"],
	"jazz": ["brushes", "jazz-swing"],
	"ambient": ["ambient-pulse", "ambient-none"],
}

GHOST_PROBABILITY = 0.2
GHOST_ENERGY_THRESHOLD = 0.7
GHOST_VELOCITY_THRESHOLD = 80
GHOST_VELOCITY_SCALE = 0.4


def pattern_names () -> typing.List[str]:

	"""Return the names of every built-in pattern."""

	return list(PATTERNS)


def get_pattern (name: str) -> typing.Optional[DrumPattern]:

	"""Return a built-in pattern by name, or ``None``."""

	return PATTERNS.get(name)


def patterns_for_genre (genre: str) -> typing.List[str]:

	"""Return the pattern names that suit a genre (boom-bap for unknown genres)."""

	return list(GENRE_PATTERNS.get(genre, [DEFAULT_PATTERN]))


def pattern_for_hint (hint: typing.Optional[str], rng: random.Random) -> DrumPattern:

	"""Pick one of the patterns mapped to ``hint`` uniformly at random."""

	candidates = HINT_TO_PATTERNS.get(hint or DEFAULT_PATTERN, [DEFAULT_PATTERN])
	name = candidates[int(rng.random() * len(candidates))]

	return PATTERNS.get(name, PATTERNS[DEFAULT_PATTERN])


def generate (
	pattern_hint: typing.Optional[str] = DEFAULT_PATTERN,
	pattern_name: typing.Optional[str] = None,
	bars: int = 1,
	energy: float = 0.7,
	humanize: float = 0.3,
	swing: typing.Optional[float] = None,
	start_tick: int = 0,
	rng: typing.Optional[random.Random] = None
) -> typing.List[cadenza.events.NoteEvent]:

	"""Render a drum pattern as note events.

	Parameters:
		pattern_hint: Producer hint used to choose a pattern when
			``pattern_name`` is not given.
		pattern_name: Exact pattern to play. An unknown name produces no
			events.
		bars: Number of bars to render.
		energy: 0-1. Scales velocities by ``0.5 + energy × 0.5`` and, above
			0.7, allows ghost notes before strong hits.
		humanize: 0-1 timing and velocity looseness.
		swing: Override for the pattern's own swing amount.
		start_tick: Tick of the first step.
		rng: Random source (a fresh ``random.Random()`` if omitted).

	Returns:
		Events sorted by start tick, one sixteenth note long, with velocities
		in 1-127.
	"""

	rng = rng or random.Random()

	if pattern_name is not None:
		pattern = PATTERNS.get(pattern_name)
		if pattern is None:
			logger.debug(f"Unknown drum pattern {pattern_name!r}, no events generated")
			return []
	else:
		pattern = pattern_for_hint(pattern_hint, rng)

	swing_amount = swing if swing is not None else pattern.swing
	step_ticks = cadenza.constants.TICKS_PER_STEP
	events: typing.List[cadenza.events.NoteEvent] = []

	for bar in range(bars):

		bar_offset = bar * cadenza.constants.STEPS_PER_BAR * step_ticks

		for sound, steps in pattern.sounds.items():

			note = cadenza.constants.gm_drums.DRUM_MAP.get(sound)

			if note is None:
				continue

			for step, step_velocity in enumerate(steps):

				if step_velocity == 0:
					continue

				velocity: float = round(step_velocity * (0.5 + energy * 0.5))

				if energy > GHOST_ENERGY_THRESHOLD and step_velocity > GHOST_VELOCITY_THRESHOLD and rng.random() < GHOST_PROBABILITY:

					ghost_tick = start_tick + bar_offset + (step - 0.5) * step_ticks

					if ghost_tick >= start_tick:
						events.append(cadenza.events.make_event(ghost_tick, step_ticks, note, round(velocity * GHOST_VELOCITY_SCALE)))

				tick: float = start_tick + bar_offset + step * step_ticks

				if step % 2 == 1 and swing_amount > 0:
					tick += swing_amount * step_ticks * 0.5

				if humanize > 0:
					tick += (rng.random() - 0.5) * humanize * step_ticks * 0.3
					velocity += round((rng.random() - 0.5) * humanize * 20)

				events.append(cadenza.events.make_event(tick, step_ticks, note, velocity))

	events.sort(key=lambda event: event.start_tick)

	return events
