"""
Leitner-box forced review escalation.

An alternate policy to SM-2 grading: repeated failures move an item down
the boxes and pin a forced review one day out; a success moves it up and
hands it back to the normal schedule.
"""

from dataclasses import replace

from retain.domain.constants import (
    HARD_BOX_REVIEW_INTERVAL_DAYS,
    LEITNER_BOXES,
    MAX_HARD_BOX_ATTEMPTS,
    MIN_LEITNER_BOX,
)
from retain.domain.models import ReviewState
from retain.domain.timeutils import Timestamp, add_days

from .interval_model import compute_interval


def apply_override(state: ReviewState, was_correct: bool, now: Timestamp) -> ReviewState:
    """
    Move the item between Leitner boxes after a response.

    Incorrect: drop one box, count the attempt and force a review in a day.
    The third consecutive failure gives up on escalation and restarts normal
    learning (review count, mastery and attempts back to zero).

    Correct: climb one box and reset attempts. Out of box 1, the item gets a
    regular interval again and its forced review is cleared.
    """
    if not was_correct:
        attempts = state.hard_box_attempts + 1
        updated = replace(
            state,
            leitner_box=max(MIN_LEITNER_BOX, state.leitner_box - 1),
            hard_box_attempts=attempts,
            force_review_at=add_days(now, HARD_BOX_REVIEW_INTERVAL_DAYS),
        )
        if attempts >= MAX_HARD_BOX_ATTEMPTS:
            updated = replace(updated, review_count=0, mastery_level=0.0, hard_box_attempts=0)
        return updated

    box = min(LEITNER_BOXES, state.leitner_box + 1)
    updated = replace(state, leitner_box=box, hard_box_attempts=0)
    if box > MIN_LEITNER_BOX:
        interval = compute_interval(state.review_count, state.ease_factor, state.difficulty)
        updated = replace(
            updated,
            next_review_at=add_days(now, interval),
            force_review_at=None,
        )
    return updated
