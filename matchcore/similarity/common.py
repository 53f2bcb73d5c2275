"""Score bounds and rounding shared by every scorer."""

import math

MIN_SCORE = 0
MAX_SCORE = 100


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves rounding up.

    Python's round() uses banker's rounding (round(62.5) == 62); scores
    are rounded the way the client app displays them (62.5 -> 63).
    """
    return int(math.floor(value + 0.5))


def clamp_score(value: float) -> int:
    """Clamp a score to [MIN_SCORE, MAX_SCORE]."""
    return int(max(MIN_SCORE, min(MAX_SCORE, value)))
