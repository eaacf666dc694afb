"""
SM-2 style scheduling engine.

Applies one graded response to a ReviewState and returns the updated state.
Stateless and side-effect free.
"""

from dataclasses import replace

from retain.application.utils.numeric import clamp
from retain.domain.constants import MAX_MASTERY, MIN_MASTERY, MINIMUM_EASE_FACTOR
from retain.domain.errors import InvalidArgumentError
from retain.domain.models import Quality, ReviewState
from retain.domain.timeutils import Timestamp, add_days

from .interval_model import compute_interval


def grade_response(state: ReviewState, quality: Quality | str, now: Timestamp) -> ReviewState:
    """
    Apply a response quality to a state.

    Ease factor, review count and mastery are updated per quality, then the
    interval is computed from the *updated* count and ease. Leitner fields
    and any forced review pass through untouched.

    Args:
        state: Current state of the item.
        quality: again / hard / good / easy.
        now: Time of the grading event (epoch ms).

    Returns:
        A new ReviewState.

    Raises:
        InvalidArgumentError: If quality is not a recognized value.
    """
    quality = Quality.parse(quality)
    ease = state.ease_factor
    count = state.review_count
    mastery = state.mastery_level

    if quality is Quality.AGAIN:
        ease = ease * 0.8 - 0.15
        count = 0
        mastery = mastery - 1
    elif quality is Quality.HARD:
        ease = ease * 0.85 - 0.05
        count = max(1, count)
        mastery = mastery - 0.5
    elif quality is Quality.GOOD:
        ease = ease + 0.1 - (0.08 + 0.02 * count)
        count = count + 1
        mastery = mastery + 0.5
    elif quality is Quality.EASY:
        ease = ease + 0.15 - (0.15 + 0.01 * count)
        count = count + 1
        mastery = mastery + 1
    else:  # pragma: no cover - Quality is a closed enum
        raise InvalidArgumentError(f"Unhandled quality {quality!r}")

    ease = max(MINIMUM_EASE_FACTOR, ease)
    mastery = clamp(mastery, MIN_MASTERY, MAX_MASTERY)
    interval = compute_interval(count, ease, state.difficulty)

    return replace(
        state,
        ease_factor=ease,
        review_count=count,
        mastery_level=mastery,
        next_review_at=add_days(now, interval),
        last_review_at=now,
    )
