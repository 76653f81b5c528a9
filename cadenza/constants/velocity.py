"""MIDI velocity constants.

Velocity is the MIDI attack strength. Generated events always carry a
velocity in ``[MIN_VELOCITY, MAX_VELOCITY]``; 0 is reserved for note-off.
"""

# MIDI note-on range
MIN_VELOCITY = 1
MAX_VELOCITY = 127

# Per-role defaults used by the orchestrator
DEFAULT_CHORD_VELOCITY = 70
HARMONY_VELOCITY = 65
TEXTURE_VELOCITY = 45
ARPEGGIO_VELOCITY = 60
LEAD_VELOCITY = 75

# Floor used by the pitched generators so notes stay audible after jitter
AUDIBLE_FLOOR = 40


def clamp (velocity: float, low: int = MIN_VELOCITY, high: int = MAX_VELOCITY) -> int:

	"""Round a velocity and clamp it into ``[low, high]``."""

	return max(low, min(high, int(round(velocity))))
