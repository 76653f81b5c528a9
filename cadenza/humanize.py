"""Humanization: small timing, velocity and duration deviations.

Generators produce events on an exact grid; these stages loosen them so the
result sounds performed. Each stage takes a list of ``NoteEvent`` objects and
returns a new list in the same order; inputs are never modified.

``full_humanize()`` runs the usual pipeline in order:

1. ``humanize()`` - swing delay on offbeats, timing and velocity jitter,
   optional downbeat accent
2. ``add_dynamics()`` - a four-beat phrase contour (swell then fall)
3. ``humanize_durations()`` - slight length variation

Offbeats are events whose fractional beat position is strictly between 0.4
and 0.6; downbeats are those within the first tenth of a beat.
"""

import dataclasses
import random
import typing

import cadenza.constants
import cadenza.constants.velocity
import cadenza.events


OFFBEAT_WINDOW = (0.4, 0.6)
DOWNBEAT_WINDOW = 0.1

# Swing delay as a share of one beat at swing = 1.0.
SWING_BEAT_FRACTION = 0.33

MAX_TIMING_OFFSET = 30		# ticks at timing = 1.0
MAX_VELOCITY_OFFSET = 25	# velocity steps at velocity = 1.0
ACCENT_SCALE = 20

MIN_HUMANIZED_DURATION = 10


def _beat_fraction (tick: int) -> float:

	return (tick / cadenza.constants.TICKS_PER_BEAT) % 1


def is_offbeat (tick: int) -> bool:

	"""Return True if ``tick`` falls on the second eighth of a beat."""

	fraction = _beat_fraction(tick)

	return OFFBEAT_WINDOW[0] < fraction < OFFBEAT_WINDOW[1]


def is_downbeat (tick: int) -> bool:

	"""Return True if ``tick`` falls at (or just after) the start of a beat."""

	return _beat_fraction(tick) < DOWNBEAT_WINDOW


def swing_delay (swing: float) -> int:

	"""Ticks an offbeat is pushed late for a given swing amount (0-1)."""

	return int(round(swing * cadenza.constants.TICKS_PER_BEAT * SWING_BEAT_FRACTION))


def humanize (
	events: typing.List[cadenza.events.NoteEvent],
	timing: float = 0.3,
	velocity: float = 0.2,
	swing: float = 0.0,
	accent_downbeats: bool = True,
	accent_strength: float = 0.15,
	rng: typing.Optional[random.Random] = None
) -> typing.List[cadenza.events.NoteEvent]:

	"""Apply swing, timing jitter, velocity jitter and downbeat accents.

	Parameters:
		events: Events to humanize.
		timing: Timing looseness 0-1; up to ±30 ticks at 1.0.
		velocity: Velocity looseness 0-1; up to ±25 at 1.0.
		swing: Offbeat delay 0-1 (0.33 is roughly a triplet feel).
		accent_downbeats: Add a fixed accent to notes on the beat.
		accent_strength: Accent size 0-1; the accent is ``round(strength × 20)``.
		rng: Random source (a fresh ``random.Random()`` if omitted).

	Returns:
		New events with ``start_tick ≥ 0`` and velocity in 1-127.
	"""

	rng = rng or random.Random()
	result: typing.List[cadenza.events.NoteEvent] = []

	for event in events:

		# Position tests use the original grid position, before any shift.
		offbeat = is_offbeat(event.start_tick)
		downbeat = is_downbeat(event.start_tick)

		start = event.start_tick
		vel = event.velocity

		if offbeat and swing > 0:
			start += swing_delay(swing)

		if timing > 0:
			start += int(round((rng.random() - 0.5) * 2 * timing * MAX_TIMING_OFFSET))

		if velocity > 0:
			vel += int(round((rng.random() - 0.5) * 2 * velocity * MAX_VELOCITY_OFFSET))

		if accent_downbeats and downbeat:
			vel += int(round(accent_strength * ACCENT_SCALE))

		result.append(dataclasses.replace(
			event,
			start_tick = max(0, start),
			velocity = cadenza.constants.velocity.clamp(vel)
		))

	return result


def apply_swing (events: typing.List[cadenza.events.NoteEvent], amount: float) -> typing.List[cadenza.events.NoteEvent]:

	"""Delay every offbeat event by ``swing_delay(amount)`` ticks; nothing else changes."""

	delay = swing_delay(amount)

	return [
		dataclasses.replace(event, start_tick=max(0, event.start_tick + delay)) if is_offbeat(event.start_tick) else event
		for event in events
	]


def phrase_multiplier (position: float) -> float:

	"""Velocity multiplier at a 0-1 position in a phrase: 0.8 rising to 1.0 at the middle, back to 0.8."""

	if position < 0.5:
		return 0.8 + position * 0.4

	return 1.0 - (position - 0.5) * 0.4


def add_dynamics (
	events: typing.List[cadenza.events.NoteEvent],
	phrase_length: float = 4,
	dynamic_range: float = 0.3
) -> typing.List[cadenza.events.NoteEvent]:

	"""Shape velocities with a swell-and-fall contour repeating every ``phrase_length`` beats.

	The adjustment is ``round((multiplier - 0.9) × 127 × dynamic_range)``, so
	notes near the start and end of a phrase are softened and notes in the
	middle are lifted.
	"""

	phrase_ticks = phrase_length * cadenza.constants.TICKS_PER_BEAT
	result: typing.List[cadenza.events.NoteEvent] = []

	for event in events:

		position = (event.start_tick % phrase_ticks) / phrase_ticks
		adjustment = int(round((phrase_multiplier(position) - 0.9) * 127 * dynamic_range))

		result.append(dataclasses.replace(event, velocity=cadenza.constants.velocity.clamp(event.velocity + adjustment)))

	return result


def humanize_durations (
	events: typing.List[cadenza.events.NoteEvent],
	amount: float = 0.1,
	rng: typing.Optional[random.Random] = None
) -> typing.List[cadenza.events.NoteEvent]:

	"""Scale each duration by a random factor in ``1 ± amount``, never below 10 ticks."""

	rng = rng or random.Random()
	result: typing.List[cadenza.events.NoteEvent] = []

	for event in events:

		variation = 1 + (rng.random() - 0.5) * 2 * amount
		duration = int(round(event.duration_ticks * variation))

		result.append(dataclasses.replace(event, duration_ticks=max(MIN_HUMANIZED_DURATION, duration)))

	return result


def full_humanize (
	events: typing.List[cadenza.events.NoteEvent],
	timing: float = 0.3,
	velocity: float = 0.2,
	swing: float = 0.0,
	accent_downbeats: bool = True,
	accent_strength: float = 0.15,
	dynamic_range: float = 0.2,
	duration_variation: float = 0.1,
	rng: typing.Optional[random.Random] = None
) -> typing.List[cadenza.events.NoteEvent]:

	"""Run ``humanize``, ``add_dynamics`` and ``humanize_durations`` in that order.

	Example:
		```python
		events = cadenza.humanize.full_humanize(
			events,
			timing = 0.3,
			velocity = 0.21,
			swing = 0.15,
			accent_downbeats = True,
			rng = random.Random(7)
		)
		```
	"""

	rng = rng or random.Random()

	result = humanize(
		events,
		timing = timing,
		velocity = velocity,
		swing = swing,
		accent_downbeats = accent_downbeats,
		accent_strength = accent_strength,
		rng = rng
	)

	result = add_dynamics(result, phrase_length=4, dynamic_range=dynamic_range)

	return humanize_durations(result, amount=duration_variation, rng=rng)
