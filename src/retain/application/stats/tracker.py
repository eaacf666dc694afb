"""
Per-session accuracy and streak statistics.

The tracker is the only mutable object in the scheduling core. Create one
per learner session and pass it explicitly; never share it across learners.
"""

from dataclasses import replace
from datetime import date, timedelta

from retain.application.utils.numeric import round_half_up
from retain.domain.models import EfficiencyStats, TrackerState
from retain.domain.ports import Clock


class StatsTracker:
    """
    Session counters updated once per graded response.

    Args:
        clock: Source of "today" for streak bookkeeping.
        state: Optional snapshot to resume from; starts from zero otherwise.
    """

    def __init__(self, clock: Clock, state: TrackerState | None = None):
        self._clock = clock
        self._state = state or TrackerState()

    @property
    def state(self) -> TrackerState:
        return self._state

    @property
    def learning_streak(self) -> int:
        return self._state.learning_streak

    def record_outcome(self, was_correct: bool) -> None:
        s = self._state
        if was_correct:
            s = replace(
                s,
                total_reviews=s.total_reviews + 1,
                correct_reviews=s.correct_reviews + 1,
                consecutive_correct=s.consecutive_correct + 1,
                consecutive_incorrect=0,
            )
        else:
            s = replace(
                s,
                total_reviews=s.total_reviews + 1,
                consecutive_incorrect=s.consecutive_incorrect + 1,
                consecutive_correct=0,
            )

        today = self._clock.today()
        self._state = replace(
            s,
            learning_streak=_next_streak(s.learning_streak, s.last_review_date, today),
            last_review_date=today,
        )

    def efficiency(self) -> EfficiencyStats:
        s = self._state
        accuracy = s.correct_reviews / s.total_reviews * 100 if s.total_reviews > 0 else 0
        return EfficiencyStats(
            accuracy_percent=round_half_up(accuracy),
            total_reviews=s.total_reviews,
            correct_reviews=s.correct_reviews,
            consecutive_correct=s.consecutive_correct,
            consecutive_incorrect=s.consecutive_incorrect,
            learning_streak=s.learning_streak,
            last_review_date=s.last_review_date,
        )


def _next_streak(streak: int, last_review_date: date | None, today: date) -> int:
    """
    Streak after an outcome recorded today.

    Same day keeps it, the following day extends it, anything else restarts at 1.
    """
    if last_review_date == today:
        return streak
    if last_review_date is not None and last_review_date == today - timedelta(days=1):
        return streak + 1
    return 1
