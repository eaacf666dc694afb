"""
Review Service — Application layer orchestrator.

Coordinates the repository, the clock, the configured scheduling strategy
and the session's stats tracker around the pure scheduling functions.
"""

import logging

from retain.application.queue_selector import (
    ScoredState,
    build_review_plan,
    due_items,
    recommend_scored,
)
from retain.application.scheduling.strategies import SchedulingStrategy, Sm2Strategy
from retain.application.stats.daily import daily_progress
from retain.application.stats.predictor import mastery_distribution, predict
from retain.application.stats.tracker import StatsTracker
from retain.domain.constants import DEFAULT_DAILY_GOAL
from retain.domain.errors import ItemNotFoundError
from retain.domain.models import (
    DailyProgress,
    DifficultyTier,
    EfficiencyStats,
    LearningRecord,
    MasteryDistribution,
    Prediction,
    Quality,
    RecordAction,
    ReviewPlan,
    ReviewState,
)
from retain.domain.ports import Clock, ReviewStateRepository

logger = logging.getLogger(__name__)


class ReviewService:
    """
    Application service for one learner session.

    Follows Dependency Inversion: depends on the ReviewStateRepository and
    Clock abstractions, not concrete adapter implementations.
    """

    def __init__(
        self,
        repo: ReviewStateRepository,
        clock: Clock,
        tracker: StatsTracker | None = None,
        strategy: SchedulingStrategy | None = None,
    ):
        """
        Args:
            repo: The repository (port) holding review states.
            clock: The clock (port) supplying "now".
            tracker: Session stats; a fresh tracker is created if not provided.
            strategy: Update policy; plain SM-2 grading if not provided.
        """
        self._repo = repo
        self._clock = clock
        self.tracker = tracker if tracker is not None else StatsTracker(clock)
        self._strategy = strategy if strategy is not None else Sm2Strategy()

    @property
    def repository(self) -> ReviewStateRepository:
        return self._repo

    @property
    def strategy(self) -> SchedulingStrategy:
        return self._strategy

    def now(self) -> int:
        return self._clock.now()

    def add_item(self, item_id: str, difficulty: DifficultyTier | str) -> ReviewState:
        """
        Register an item with a default state, due now, and log the addition.

        An item that already exists is returned unchanged.
        """
        try:
            return self._repo.fetch_one(item_id)
        except ItemNotFoundError:
            now = self._clock.now()
            state = ReviewState.new(item_id, difficulty, now)

        record = LearningRecord(item_id, RecordAction.ADD, now, state.difficulty)
        self._repo.commit(item_id, state, record)
        logger.info(f"Added {item_id} ({state.difficulty.value})")
        return state

    def grade(self, item_id: str, quality: Quality | str) -> ReviewState:
        """
        Apply a graded response to an item and persist the result.

        The new state, the learning record and the tracker snapshot are
        committed together. The first correct recall of an item is logged
        as ``learn``; every other response as ``review``.

        Raises:
            ItemNotFoundError: If the item does not exist.
            InvalidArgumentError: If quality is not recognized.
        """
        quality = Quality.parse(quality)
        current = self._repo.fetch_one(item_id)
        now = self._clock.now()
        updated = self._strategy.apply(current, quality, now)

        action = RecordAction.REVIEW
        if quality.is_correct and not self._has_learned(item_id):
            action = RecordAction.LEARN
        record = LearningRecord(item_id, action, now, updated.difficulty, quality)

        self.tracker.record_outcome(quality.is_correct)
        self._repo.commit(item_id, updated, record, self.tracker.state)

        logger.debug(
            f"Graded {item_id} {quality.value} via {self._strategy.name} ({action.value}): "
            f"count={updated.review_count} ease={updated.ease_factor:.2f} "
            f"mastery={updated.mastery_level} box={updated.leitner_box}"
        )
        return updated

    def due(self) -> list[ReviewState]:
        return due_items(self._repo.fetch_all(), self._clock.now())

    def recommend(self, max_count: int) -> list[ScoredState]:
        """
        Highest-priority due items with their scores.
        """
        return recommend_scored(self._repo.fetch_all(), self._clock.now(), max_count)

    def plan(self) -> ReviewPlan:
        return build_review_plan(self._repo.fetch_all(), self._clock.now())

    def predict(self) -> Prediction:
        return predict(self._repo.fetch_all(), self.tracker.learning_streak)

    def distribution(self) -> MasteryDistribution:
        return mastery_distribution(self._repo.fetch_all())

    def efficiency(self) -> EfficiencyStats:
        return self.tracker.efficiency()

    def today(self, daily_goal: int = DEFAULT_DAILY_GOAL) -> DailyProgress:
        """
        Today's added, learned and reviewed counts, pending reviews and goal progress.
        """
        day = self._clock.today()
        records = [r for r in self._repo.fetch_records() if self._clock.date_of(r.at) == day]
        return daily_progress(day, records, self._repo.fetch_all(), self._clock.now(), daily_goal)

    def _has_learned(self, item_id: str) -> bool:
        return any(
            r.item_id == item_id and r.action is RecordAction.LEARN
            for r in self._repo.fetch_records()
        )
