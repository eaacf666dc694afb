from datetime import date

import pytest

from retain.application.stats.daily import daily_progress
from retain.domain.errors import InvalidArgumentError
from retain.domain.models import LearningRecord, Quality, RecordAction

from ...conftest import DAY, T0

DAY_ONE = date(2024, 3, 1)


def record(action, item_id="uno", quality=None):
    return LearningRecord(item_id, action, T0, quality=quality)


def test_counts_each_action():
    records = [
        record(RecordAction.ADD, "uno"),
        record(RecordAction.ADD, "dos"),
        record(RecordAction.LEARN, "uno", Quality.GOOD),
        record(RecordAction.REVIEW, "dos", Quality.AGAIN),
        record(RecordAction.REVIEW, "dos", Quality.HARD),
    ]

    p = daily_progress(DAY_ONE, records, [], T0, daily_goal=20)

    assert p.day == DAY_ONE
    assert (p.added, p.learned, p.reviewed) == (2, 1, 2)
    assert p.goal_percent == 5


def test_pending_review_counts_due_and_forced(make_state):
    states = [
        make_state("due", next_review_at=T0 - DAY),
        make_state("now", next_review_at=T0),
        make_state("later", next_review_at=T0 + DAY),
        make_state("forced", next_review_at=T0 + 5 * DAY, force_review_at=T0),
    ]

    p = daily_progress(DAY_ONE, [], states, T0, daily_goal=20)

    assert p.pending_review == 3


@pytest.mark.parametrize(
    "learned, goal, expected",
    [(0, 20, 0), (1, 8, 13), (10, 20, 50), (20, 20, 100), (30, 20, 100), (1, 3, 33)],
)
def test_goal_percent_rounds_half_up_and_caps(learned, goal, expected):
    records = [record(RecordAction.LEARN, f"w{i}") for i in range(learned)]

    p = daily_progress(DAY_ONE, records, [], T0, daily_goal=goal)

    assert p.goal_percent == expected
    assert p.goal_met == (learned >= goal)


@pytest.mark.parametrize("goal", [0, -1, 101])
def test_goal_out_of_range(goal):
    with pytest.raises(InvalidArgumentError, match="daily_goal"):
        daily_progress(DAY_ONE, [], [], T0, daily_goal=goal)
