"""
Review Service Factory
Centralizes the wiring of repository, clock, tracker and strategy from config.
"""

import logging

from retain.application.config import AppConfig
from retain.application.review_service import ReviewService
from retain.application.scheduling.strategies import build_strategy
from retain.application.stats.tracker import StatsTracker
from retain.domain.ports import Clock, ReviewStateRepository
from retain.infrastructure.adapters.json_store import JsonReviewStateRepository
from retain.infrastructure.adapters.memory_store import InMemoryReviewStateRepository
from retain.infrastructure.clock import SystemClock

logger = logging.getLogger(__name__)


def get_repository(config: AppConfig) -> ReviewStateRepository:
    """
    Returns the ReviewStateRepository implementation selected by config.
    """
    if config.backend == "memory":
        return InMemoryReviewStateRepository()

    logger.debug(f"Using deck file {config.store_path}")
    return JsonReviewStateRepository(config.store_path)


def build_review_service(
    config: AppConfig,
    repo: ReviewStateRepository | None = None,
    clock: Clock | None = None,
) -> ReviewService:
    """
    Build a ReviewService for a new learner session.

    The tracker resumes from the repository's stored snapshot.
    """
    repo = repo if repo is not None else get_repository(config)
    clock = clock if clock is not None else SystemClock()

    return ReviewService(
        repo=repo,
        clock=clock,
        tracker=StatsTracker(clock, repo.load_stats()),
        strategy=build_strategy(config.policy),
    )
