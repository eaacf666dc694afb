"""
Interval model: how many days until an item is shown again.

Pure computation, no I/O.
"""

import math

from retain.application.utils.numeric import clamp, round_half_up
from retain.domain.constants import (
    BASE_INTERVAL_DAYS,
    GRADUATION_INTERVAL_DAYS,
    MAX_INTERVAL_DAYS,
    MIN_INTERVAL_DAYS,
)
from retain.domain.errors import InvalidArgumentError
from retain.domain.models import DifficultyTier

DIFFICULTY_MULTIPLIERS: dict[DifficultyTier, float] = {
    DifficultyTier.EASY: 0.8,
    DifficultyTier.MEDIUM: 1.0,
    DifficultyTier.HARD: 1.5,
}


def compute_interval(
    review_count: int,
    ease_factor: float,
    difficulty: DifficultyTier | str,
) -> int:
    """
    Compute the next review interval in days.

    The first two passes use fixed steps (1 day, then 6 days); after that the
    interval grows linearly with the review count, scaled by ease and
    difficulty. The result is always within [1, 365].

    Args:
        review_count: Successful passes, after the current grading is applied.
        ease_factor: Ease factor, after the current grading is applied.
        difficulty: Content difficulty tier.

    Returns:
        Interval in whole days.
    """
    if review_count < 0:
        raise InvalidArgumentError(f"review_count must be >= 0, got {review_count}")
    if not math.isfinite(ease_factor):
        raise InvalidArgumentError(f"ease_factor must be finite, got {ease_factor}")

    multiplier = DIFFICULTY_MULTIPLIERS[DifficultyTier.parse(difficulty)]

    if review_count == 0:
        interval = BASE_INTERVAL_DAYS
    elif review_count == 1:
        interval = GRADUATION_INTERVAL_DAYS
    else:
        interval = round_half_up(BASE_INTERVAL_DAYS * ease_factor * review_count * multiplier)

    return clamp(interval, MIN_INTERVAL_DAYS, MAX_INTERVAL_DAYS)
