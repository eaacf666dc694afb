"""
Composable scheduling strategies.

SM-2 grading and the Leitner override are independent update paths. A
strategy wraps one of them (or a chain of both) behind a single
``apply(state, quality, now)`` call so the composition is chosen by
configuration rather than hard-wired.
"""

from dataclasses import replace
from typing import Literal, Protocol

from retain.domain.errors import InvalidArgumentError
from retain.domain.models import Quality, ReviewState
from retain.domain.timeutils import Timestamp

from .engine import grade_response
from .leitner import apply_override

Policy = Literal["sm2", "leitner", "sm2+leitner"]


class SchedulingStrategy(Protocol):
    """Protocol for per-response state updates."""

    name: str

    def apply(self, state: ReviewState, quality: Quality, now: Timestamp) -> ReviewState:
        """Return the state that results from answering with quality at now."""
        ...


class Sm2Strategy:
    name = "sm2"

    def apply(self, state: ReviewState, quality: Quality, now: Timestamp) -> ReviewState:
        return grade_response(state, quality, now)


class LeitnerStrategy:
    """
    Leitner override driven by whether the quality counts as correct.

    Used alone it is the whole update path, so it also stamps the review time.
    """

    name = "leitner"

    def apply(self, state: ReviewState, quality: Quality, now: Timestamp) -> ReviewState:
        updated = apply_override(state, Quality.parse(quality).is_correct, now)
        return replace(updated, last_review_at=now)


class ComposedStrategy:
    """Applies strategies in order, feeding each result into the next."""

    def __init__(self, *strategies: SchedulingStrategy):
        if not strategies:
            raise InvalidArgumentError("ComposedStrategy needs at least one strategy")
        self.strategies = strategies
        self.name = "+".join(s.name for s in strategies)

    def apply(self, state: ReviewState, quality: Quality, now: Timestamp) -> ReviewState:
        for strategy in self.strategies:
            state = strategy.apply(state, quality, now)
        return state


def build_strategy(policy: str) -> SchedulingStrategy:
    """
    Map a configured policy name to a strategy.

    "sm2" is the plain grading path, "leitner" the override alone, and
    "sm2+leitner" grades first and then applies the override.
    """
    if policy == "sm2":
        return Sm2Strategy()
    if policy == "leitner":
        return LeitnerStrategy()
    if policy == "sm2+leitner":
        return ComposedStrategy(Sm2Strategy(), LeitnerStrategy())
    raise InvalidArgumentError(
        f"Unknown scheduling policy {policy!r}; expected sm2, leitner or sm2+leitner"
    )
