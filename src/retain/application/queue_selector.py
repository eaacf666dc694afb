"""
Queue selector for review sessions.

Builds review sessions by:
1. Filtering states that are due (normally or by forced review)
2. Ordering forced reviews first, earliest first
3. Scoring due states so a bounded session gets the most urgent items
"""

from collections.abc import Iterable
from dataclasses import dataclass

from retain.domain.constants import (
    FORCED_REVIEW_BONUS,
    MASTERY_WEIGHT,
    MAX_MASTERY,
    MONTH_HORIZON_DAYS,
    REVIEW_COUNT_CEILING,
    REVIEW_COUNT_WEIGHT,
    URGENCY_WINDOW_DAYS,
    WEEK_HORIZON_DAYS,
)
from retain.domain.errors import InvalidArgumentError
from retain.domain.models import DifficultyTier, ReviewPlan, ReviewState
from retain.domain.timeutils import Timestamp, days_until

DIFFICULTY_WEIGHTS: dict[DifficultyTier, int] = {
    DifficultyTier.EASY: 1,
    DifficultyTier.MEDIUM: 2,
    DifficultyTier.HARD: 3,
}


@dataclass(frozen=True)
class ScoredState:
    """A due state paired with its priority score."""

    state: ReviewState
    score: float


def is_due(state: ReviewState, now: Timestamp) -> bool:
    if state.next_review_at <= now:
        return True
    return state.force_review_at is not None and state.force_review_at <= now


def due_items(states: Iterable[ReviewState], now: Timestamp) -> list[ReviewState]:
    """
    Return the states due at now, forced reviews first.

    Forced states are ordered by force_review_at ascending; states without a
    forced review follow in input order.
    """
    due = [s for s in states if is_due(s, now)]
    # sorted() is stable, so equal keys keep their input order
    return sorted(due, key=_forced_sort_key)


def priority_score(state: ReviewState, now: Timestamp) -> float:
    """
    Heuristic urgency of a due state; higher is more urgent.

    Forced reviews dominate; then weak mastery, few reviews, harder content
    and closeness of the normal due time each add weight.
    """
    score: float = FORCED_REVIEW_BONUS if state.force_review_at is not None else 0
    score += (MAX_MASTERY - state.mastery_level) * MASTERY_WEIGHT
    score += (REVIEW_COUNT_CEILING - state.review_count) * REVIEW_COUNT_WEIGHT
    score += DIFFICULTY_WEIGHTS[state.difficulty]
    score += max(0, URGENCY_WINDOW_DAYS - days_until(state.next_review_at, now))
    return score


def recommend_scored(
    states: Iterable[ReviewState],
    now: Timestamp,
    max_count: int,
) -> list[ScoredState]:
    """
    Score the due states and keep the max_count highest.

    Ties keep the due_items order.
    """
    if max_count < 0:
        raise InvalidArgumentError(f"max_count must be >= 0, got {max_count}")

    scored = [ScoredState(s, priority_score(s, now)) for s in due_items(states, now)]
    scored.sort(key=lambda x: x.score, reverse=True)
    return scored[:max_count]


def recommend(states: Iterable[ReviewState], now: Timestamp, max_count: int) -> list[ReviewState]:
    """Top max_count due states by priority score."""
    return [x.state for x in recommend_scored(states, now, max_count)]


def build_review_plan(states: Iterable[ReviewState], now: Timestamp) -> ReviewPlan:
    """
    Bucket every state by how many days remain until it is due.

    The effective due time is the forced review when one is set.
    """
    plan = ReviewPlan()

    for state in sorted(states, key=lambda s: s.effective_due_at):
        days = days_until(state.effective_due_at, now)
        if days <= 0:
            plan.due_now.append(state)
        elif days <= WEEK_HORIZON_DAYS:
            plan.this_week.append(state)
        elif days <= MONTH_HORIZON_DAYS:
            plan.this_month.append(state)
        else:
            plan.later.append(state)

    return plan


def _forced_sort_key(state: ReviewState) -> tuple[int, int]:
    """
    Sort key placing forced states first, by forced time.
    """
    if state.force_review_at is None:
        return (1, 0)
    return (0, state.force_review_at)
