"""Small numeric helpers shared by the scheduling modules."""

import math


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, with .5 going up.

    Python's built-in round() uses banker's rounding (12.5 -> 12), which
    would shift intervals and percentages at exact halves.
    """
    return math.floor(value + 0.5)


def clamp(value, low, high):
    return max(low, min(high, value))
