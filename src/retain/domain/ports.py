"""
Ports (interfaces) for the scheduling core's collaborators.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod
from datetime import date

from .models import LearningRecord, ReviewState, TrackerState
from .timeutils import Timestamp


class ReviewStateRepository(ABC):
    """
    Port for loading and storing review states, the learning log and the
    tracker snapshot.

    Implementations:
        - InMemoryReviewStateRepository: Dict-backed, for tests and embedding.
        - JsonReviewStateRepository: A single JSON file on disk.
    """

    @abstractmethod
    def fetch_all(self) -> list[ReviewState]:
        """
        Return every stored state, in insertion order.
        """
        pass

    @abstractmethod
    def fetch_one(self, item_id: str) -> ReviewState:
        """
        Return the state stored under item_id.

        Raises:
            ItemNotFoundError: If no state exists for item_id.
        """
        pass

    @abstractmethod
    def upsert(self, item_id: str, state: ReviewState) -> None:
        """
        Insert or replace the state for item_id.

        Must be atomic per id: a concurrent reader sees either the old or the
        new state, never a mix.
        """
        pass

    @abstractmethod
    def commit(
        self,
        item_id: str,
        state: ReviewState,
        record: LearningRecord,
        stats: TrackerState | None = None,
    ) -> None:
        """
        Store the state, append the record and (if given) replace the tracker
        snapshot, all or nothing.
        """
        pass

    @abstractmethod
    def fetch_records(self) -> list[LearningRecord]:
        """
        Return the learning log, oldest first.
        """
        pass

    @abstractmethod
    def load_stats(self) -> TrackerState:
        """
        Return the stored tracker snapshot, or a fresh one if none was saved.
        """
        pass


class Clock(ABC):
    """Port for the current time."""

    @abstractmethod
    def now(self) -> Timestamp:
        """Current time as epoch milliseconds."""
        pass

    @abstractmethod
    def today(self) -> date:
        """Current calendar date, used for streak bookkeeping."""
        pass

    @abstractmethod
    def date_of(self, ts: Timestamp) -> date:
        """Calendar date of ts in the same timezone as today()."""
        pass
