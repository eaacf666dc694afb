"""
Daily activity against the learning goal.

This is a pure computation module with no I/O. The caller picks out
today's records; this module only counts.
"""

from collections.abc import Iterable
from datetime import date

from retain.application.queue_selector import is_due
from retain.application.utils.numeric import round_half_up
from retain.domain.constants import MAX_DAILY_GOAL
from retain.domain.errors import InvalidArgumentError
from retain.domain.models import (
    DailyProgress,
    LearningRecord,
    RecordAction,
    ReviewState,
)
from retain.domain.timeutils import Timestamp


def daily_progress(
    day: date,
    records: Iterable[LearningRecord],
    states: Iterable[ReviewState],
    now: Timestamp,
    daily_goal: int,
) -> DailyProgress:
    """
    Summarize one day of the learning log.

    Args:
        day: The calendar day being summarized.
        records: Records logged on that day.
        states: Every state in the deck, for the pending review count.
        now: Reference time for what is due.
        daily_goal: Items to learn per day, 1 to 100.

    Goal progress is learned items over the goal, capped at 100 percent.
    """
    if not 1 <= daily_goal <= MAX_DAILY_GOAL:
        raise InvalidArgumentError(
            f"daily_goal must be between 1 and {MAX_DAILY_GOAL}, got {daily_goal}"
        )

    counts = {action: 0 for action in RecordAction}
    for record in records:
        counts[record.action] += 1

    learned = counts[RecordAction.LEARN]
    return DailyProgress(
        day=day,
        added=counts[RecordAction.ADD],
        learned=learned,
        reviewed=counts[RecordAction.REVIEW],
        pending_review=sum(1 for s in states if is_due(s, now)),
        daily_goal=daily_goal,
        goal_percent=min(100, round_half_up(learned / daily_goal * 100)),
    )
