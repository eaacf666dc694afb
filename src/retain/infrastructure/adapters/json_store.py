"""
JSON Review State Repository — Infrastructure adapter for a deck file.

Implements ReviewStateRepository on top of a single JSON document:

    {
      "version": 1,
      "items": {"<item_id>": {...state fields...}, ...},
      "records": [{...learning record...}, ...],
      "stats": {...tracker snapshot...}
    }

Timestamps are stored as epoch milliseconds. Every write goes to a
temporary file that then replaces the deck, so readers never see a
half-written document.
"""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any

from retain.domain.errors import InvalidArgumentError, ItemNotFoundError, StoreError
from retain.domain.models import LearningRecord, ReviewState, TrackerState
from retain.domain.ports import ReviewStateRepository
from retain.domain.timeutils import to_epoch_ms

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


def state_to_dict(state: ReviewState) -> dict[str, Any]:
    return {
        "difficulty": state.difficulty.value,
        "ease_factor": state.ease_factor,
        "review_count": state.review_count,
        "mastery_level": state.mastery_level,
        "next_review_at": state.next_review_at,
        "last_review_at": state.last_review_at,
        "leitner_box": state.leitner_box,
        "hard_box_attempts": state.hard_box_attempts,
        "force_review_at": state.force_review_at,
    }


def state_from_dict(item_id: str, data: dict[str, Any]) -> ReviewState:
    """
    Rebuild a state from its stored form.

    Timestamps may be epoch milliseconds or ISO-8601 strings.
    """

    def ts(key: str) -> int | None:
        value = data.get(key)
        return None if value is None else to_epoch_ms(value)

    next_review_at = ts("next_review_at")
    if next_review_at is None:
        raise InvalidArgumentError(f"Item '{item_id}' has no next_review_at")

    return ReviewState(
        item_id=item_id,
        difficulty=data.get("difficulty", "medium"),
        next_review_at=next_review_at,
        ease_factor=float(data.get("ease_factor", 2.5)),
        review_count=int(data.get("review_count", 0)),
        mastery_level=float(data.get("mastery_level", 0.0)),
        last_review_at=ts("last_review_at"),
        leitner_box=int(data.get("leitner_box", 1)),
        hard_box_attempts=int(data.get("hard_box_attempts", 0)),
        force_review_at=ts("force_review_at"),
    )


class JsonReviewStateRepository(ReviewStateRepository):
    """
    Persists review states, the learning log and tracker stats in a JSON file.

    A missing file is an empty deck; it is created on the first write.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def fetch_all(self) -> list[ReviewState]:
        with self._lock:
            doc = self._read()
        return [self._decode(item_id, data) for item_id, data in doc["items"].items()]

    def fetch_one(self, item_id: str) -> ReviewState:
        with self._lock:
            doc = self._read()
        if item_id not in doc["items"]:
            raise ItemNotFoundError(item_id)
        return self._decode(item_id, doc["items"][item_id])

    def upsert(self, item_id: str, state: ReviewState) -> None:
        _check_id(item_id, state)
        with self._lock:
            doc = self._read()
            doc["items"][item_id] = state_to_dict(state)
            self._write(doc)

    def commit(
        self,
        item_id: str,
        state: ReviewState,
        record: LearningRecord,
        stats: TrackerState | None = None,
    ) -> None:
        _check_id(item_id, state)
        with self._lock:
            doc = self._read()
            doc["items"][item_id] = state_to_dict(state)
            doc["records"].append(record.to_dict())
            if stats is not None:
                doc["stats"] = stats.to_dict()
            self._write(doc)

    def fetch_records(self) -> list[LearningRecord]:
        with self._lock:
            doc = self._read()
        try:
            return [LearningRecord.from_dict(raw) for raw in doc["records"]]
        except (InvalidArgumentError, KeyError, TypeError, ValueError) as e:
            raise StoreError(f"Corrupt learning record in {self.path}: {e}") from e

    def load_stats(self) -> TrackerState:
        with self._lock:
            doc = self._read()
        raw = doc.get("stats")
        if not raw:
            return TrackerState()
        try:
            return TrackerState.from_dict(raw)
        except (TypeError, ValueError) as e:
            raise StoreError(f"Corrupt stats in {self.path}: {e}") from e

    def _decode(self, item_id: str, data: dict[str, Any]) -> ReviewState:
        try:
            return state_from_dict(item_id, data)
        except (InvalidArgumentError, TypeError, ValueError) as e:
            raise StoreError(f"Corrupt entry '{item_id}' in {self.path}: {e}") from e

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {"version": FORMAT_VERSION, "items": {}, "records": []}

        try:
            doc = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise StoreError(f"Could not decode {self.path}: {e}") from e

        if (
            not isinstance(doc, dict)
            or not isinstance(doc.get("items", {}), dict)
            or not isinstance(doc.get("records", []), list)
        ):
            raise StoreError(f"Unexpected document layout in {self.path}")

        doc.setdefault("items", {})
        doc.setdefault("records", [])
        return doc

    def _write(self, doc: dict[str, Any]) -> None:
        doc["version"] = FORMAT_VERSION
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(doc, f, indent=2, sort_keys=True)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug(f"Wrote {len(doc['items'])} items to {self.path}")


def _check_id(item_id: str, state: ReviewState) -> None:
    if state.item_id != item_id:
        raise InvalidArgumentError(f"Cannot store state of '{state.item_id}' under id '{item_id}'")
