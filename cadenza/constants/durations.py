"""Tick-based duration constants for note lengths and step sizes.

All values are in **ticks** at 480 ticks per beat. Triplet and dotted values
are rounded to the nearest tick.

Multiply by a count for multi-note spans::

    import cadenza.constants.durations as dur

    # "3 eighth notes"
    length = 3 * dur.EIGHTH      # 720 ticks
"""

import cadenza.constants


WHOLE = cadenza.constants.TICKS_PER_BEAT * 4
HALF = cadenza.constants.TICKS_PER_BEAT * 2
QUARTER = cadenza.constants.TICKS_PER_BEAT
EIGHTH = cadenza.constants.TICKS_PER_BEAT // 2
SIXTEENTH = cadenza.constants.TICKS_PER_BEAT // 4
TRIPLET_QUARTER = round(cadenza.constants.TICKS_PER_BEAT * 2 / 3)
TRIPLET_EIGHTH = round(cadenza.constants.TICKS_PER_BEAT / 3)
TRIPLET_SIXTEENTH = round(cadenza.constants.TICKS_PER_BEAT / 6)
DOTTED_HALF = cadenza.constants.TICKS_PER_BEAT * 3
DOTTED_QUARTER = round(cadenza.constants.TICKS_PER_BEAT * 1.5)
DOTTED_EIGHTH = round(cadenza.constants.TICKS_PER_BEAT * 0.75)
