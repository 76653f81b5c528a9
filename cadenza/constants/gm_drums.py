"""General MIDI Level 1 drum note map.

Standard percussion assignments for MIDI channel 10 (0-indexed channel 9).
Drum patterns name their lanes with the keys of ``DRUM_MAP``; the drum
generator resolves each lane to its note number when it emits events.

Two ways to use this module:

1. **By lane name** - look up ``DRUM_MAP["kick"]`` when building a pattern
   table keyed by sound name.
2. **As constants** - reference note numbers directly, e.g.
   ``cadenza.constants.gm_drums.KICK_1``.
"""

import typing


# ─── Individual note constants ───────────────────────────────────────
#
# The subset of the GM percussion key map used by the pattern library.

KICK_2 = 35
KICK_1 = 36
SIDE_STICK = 37
SNARE_1 = 38
HAND_CLAP = 39
SNARE_2 = 40
HI_HAT_CLOSED = 42
HI_HAT_PEDAL = 44
LOW_TOM = 45
HI_HAT_OPEN = 46
LOW_MID_TOM = 47
CRASH_1 = 49
HIGH_TOM = 50
RIDE_1 = 51
RIDE_BELL = 53
TAMBOURINE = 54
COWBELL = 56
CRASH_2 = 57
MARACAS = 70

# GM channel 10, zero-indexed.
DRUM_CHANNEL = 9


# ─── Lane name map ───────────────────────────────────────────────────
#
# Drum pattern lanes use these names. "shaker" maps onto maracas, the
# closest shaken sound in the GM kit.

DRUM_MAP: typing.Dict[str, int] = {
	"kick": KICK_1,
	"kick_2": KICK_2,
	"snare": SNARE_1,
	"snare_rim": SIDE_STICK,
	"snare_side": SNARE_2,
	"closed_hat": HI_HAT_CLOSED,
	"open_hat": HI_HAT_OPEN,
	"pedal_hat": HI_HAT_PEDAL,
	"clap": HAND_CLAP,
	"tom_low": LOW_TOM,
	"tom_mid": LOW_MID_TOM,
	"tom_high": HIGH_TOM,
	"crash": CRASH_1,
	"crash_2": CRASH_2,
	"ride": RIDE_1,
	"ride_bell": RIDE_BELL,
	"tambourine": TAMBOURINE,
	"cowbell": COWBELL,
	"shaker": MARACAS,
}
