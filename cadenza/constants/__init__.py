"""Constants for Cadenza.

This package contains the time base and the shared lookup tables:

- ``cadenza.constants.durations`` - Tick-based note durations
- ``cadenza.constants.velocity`` - MIDI velocity bounds and defaults
- ``cadenza.constants.gm_drums`` - General MIDI drum sound map

Every component computes in ticks at a fixed resolution of **480 ticks per
quarter-note beat** (the standard MIDI file resolution). The time base is
re-exported here so ``cadenza.constants.TICKS_PER_BEAT`` works everywhere.
"""

TICKS_PER_BEAT = 480

# A bar of the step grid is 16 sixteenth notes.
STEPS_PER_BAR = 16
TICKS_PER_STEP = TICKS_PER_BEAT // 4
