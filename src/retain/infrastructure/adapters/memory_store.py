"""
In-memory Review State Repository.

Implements ReviewStateRepository with a plain dict. States and records are
immutable, so handing them out directly is safe.
"""

import threading
from collections.abc import Iterable

from retain.domain.errors import InvalidArgumentError, ItemNotFoundError
from retain.domain.models import LearningRecord, ReviewState, TrackerState
from retain.domain.ports import ReviewStateRepository


class InMemoryReviewStateRepository(ReviewStateRepository):
    def __init__(self, states: Iterable[ReviewState] = ()):
        self._lock = threading.Lock()
        self._states: dict[str, ReviewState] = {s.item_id: s for s in states}
        self._records: list[LearningRecord] = []
        self._stats = TrackerState()

    def fetch_all(self) -> list[ReviewState]:
        with self._lock:
            return list(self._states.values())

    def fetch_one(self, item_id: str) -> ReviewState:
        with self._lock:
            try:
                return self._states[item_id]
            except KeyError:
                raise ItemNotFoundError(item_id) from None

    def upsert(self, item_id: str, state: ReviewState) -> None:
        _check_id(item_id, state)
        with self._lock:
            self._states[item_id] = state

    def commit(
        self,
        item_id: str,
        state: ReviewState,
        record: LearningRecord,
        stats: TrackerState | None = None,
    ) -> None:
        _check_id(item_id, state)
        with self._lock:
            self._states[item_id] = state
            self._records.append(record)
            if stats is not None:
                self._stats = stats

    def fetch_records(self) -> list[LearningRecord]:
        with self._lock:
            return list(self._records)

    def load_stats(self) -> TrackerState:
        return self._stats

    def __len__(self) -> int:
        return len(self._states)


def _check_id(item_id: str, state: ReviewState) -> None:
    if state.item_id != item_id:
        raise InvalidArgumentError(f"Cannot store state of '{state.item_id}' under id '{item_id}'")
