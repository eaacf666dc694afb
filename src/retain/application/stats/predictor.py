"""
Progress predictor for a deck.

This is a pure computation module with no I/O.
"""

from collections.abc import Iterable

from retain.application.utils.numeric import round_half_up
from retain.domain.constants import MASTERED_THRESHOLD, MAX_DAILY_LEARNING_RATE
from retain.domain.errors import InvalidArgumentError
from retain.domain.models import MasteryDistribution, Prediction, ReviewState


def predict(states: Iterable[ReviewState], streak: int) -> Prediction:
    """
    Estimate how long mastering the whole deck will take.

    The daily learning rate is learned items per streak day, capped at 20.
    With nothing learned the rate is zero and the estimate is unbounded
    (estimated_days_to_master is None).

    Args:
        states: Every state in the deck.
        streak: Current learning streak in days.
    """
    if streak < 0:
        raise InvalidArgumentError(f"streak must be >= 0, got {streak}")

    states = list(states)
    total = len(states)
    learned = [s for s in states if s.review_count > 0]
    mastered = sum(1 for s in states if s.mastery_level >= MASTERED_THRESHOLD)

    avg_review_count = sum(s.review_count for s in learned) / len(learned) if learned else 0.0
    rate = min(MAX_DAILY_LEARNING_RATE, len(learned) / max(1, streak))
    days_to_master = (total - mastered) / rate if rate > 0 else None

    return Prediction(
        total_words=total,
        learned_words=len(learned),
        mastered_words=mastered,
        progress_percentage=round_half_up(mastered / total * 100) if total > 0 else 0,
        avg_review_count=avg_review_count,
        daily_learning_rate=rate,
        estimated_days_to_master=days_to_master,
    )


def mastery_distribution(states: Iterable[ReviewState]) -> MasteryDistribution:
    """Split the deck into not started, learning and mastered items."""
    not_started = learning = mastered = 0
    for s in states:
        if s.mastery_level >= MASTERED_THRESHOLD:
            mastered += 1
        elif s.review_count == 0:
            not_started += 1
        else:
            learning += 1
    return MasteryDistribution(not_started=not_started, learning=learning, mastered=mastered)
