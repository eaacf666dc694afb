from datetime import date, datetime, timedelta, timezone

import pytest

from retain.application.stats.tracker import StatsTracker
from retain.domain.models import TrackerState
from retain.infrastructure.clock import FixedClock


@pytest.fixture
def tracker(clock):
    return StatsTracker(clock)


def test_fresh_tracker_reports_zero(tracker):
    stats = tracker.efficiency()

    assert stats.accuracy_percent == 0
    assert stats.total_reviews == 0
    assert stats.correct_reviews == 0
    assert stats.learning_streak == 0
    assert stats.last_review_date is None


def test_outcomes_update_counters(tracker):
    tracker.record_outcome(True)
    tracker.record_outcome(True)
    tracker.record_outcome(False)

    stats = tracker.efficiency()
    assert stats.total_reviews == 3
    assert stats.correct_reviews == 2
    assert stats.consecutive_correct == 0
    assert stats.consecutive_incorrect == 1
    assert stats.accuracy_percent == 67


def test_success_clears_incorrect_run(tracker):
    tracker.record_outcome(False)
    tracker.record_outcome(False)
    tracker.record_outcome(True)

    stats = tracker.efficiency()
    assert stats.consecutive_incorrect == 0
    assert stats.consecutive_correct == 1


@pytest.mark.parametrize(
    "correct, total, expected",
    [(1, 2, 50), (1, 8, 13), (2, 3, 67), (1, 3, 33), (5, 5, 100)],
)
def test_accuracy_rounds_half_up(clock, correct, total, expected):
    tracker = StatsTracker(clock)
    for i in range(total):
        tracker.record_outcome(i < correct)
    assert tracker.efficiency().accuracy_percent == expected


def test_first_outcome_starts_streak(tracker, clock):
    tracker.record_outcome(True)

    assert tracker.learning_streak == 1
    assert tracker.efficiency().last_review_date == clock.today()


def test_same_day_keeps_streak(tracker, clock):
    tracker.record_outcome(True)
    clock.advance(hours=3)
    tracker.record_outcome(False)

    assert tracker.learning_streak == 1


def test_next_day_extends_streak(tracker, clock):
    tracker.record_outcome(True)
    clock.advance(days=1)
    tracker.record_outcome(True)
    clock.advance(days=1)
    tracker.record_outcome(False)

    assert tracker.learning_streak == 3


def test_gap_resets_streak(tracker, clock):
    for _ in range(3):
        tracker.record_outcome(True)
        clock.advance(days=1)
    assert tracker.learning_streak == 3

    clock.advance(days=1)
    tracker.record_outcome(True)

    assert tracker.learning_streak == 1


@pytest.mark.parametrize(
    "gap_days, expected", [(0, 4), (1, 5), (2, 1), (10, 1)]
)
def test_streak_law_against_seeded_state(clock, gap_days, expected):
    today = clock.today()
    seeded = TrackerState(
        total_reviews=10,
        correct_reviews=8,
        last_review_date=today - timedelta(days=gap_days),
        learning_streak=4,
    )
    tracker = StatsTracker(clock, seeded)

    tracker.record_outcome(True)

    assert tracker.learning_streak == expected
    assert tracker.state.last_review_date == today
    assert tracker.state.total_reviews == 11


def test_streak_follows_calendar_days_not_elapsed_hours():
    clock = FixedClock(datetime(2024, 3, 1, 23, 30, tzinfo=timezone.utc))
    tracker = StatsTracker(clock)

    tracker.record_outcome(True)
    clock.advance(hours=1)
    tracker.record_outcome(True)

    assert clock.today() == date(2024, 3, 2)
    assert tracker.learning_streak == 2


def test_trackers_are_isolated_per_session(clock):
    alice = StatsTracker(clock)
    bob = StatsTracker(clock)

    alice.record_outcome(True)
    alice.record_outcome(True)

    assert alice.efficiency().total_reviews == 2
    assert bob.efficiency().total_reviews == 0
    assert bob.learning_streak == 0


def test_efficiency_is_a_pure_read(tracker):
    tracker.record_outcome(True)
    first = tracker.efficiency()
    assert tracker.efficiency() == first
    assert tracker.state.total_reviews == 1
