"""
Domain models for review scheduling.

These are pure data structures with no I/O or external dependencies.
"""

import math
from dataclasses import asdict, dataclass, field
from datetime import date
from enum import Enum

from .constants import (
    INITIAL_EASE_FACTOR,
    LEITNER_BOXES,
    MAX_MASTERY,
    MIN_LEITNER_BOX,
    MIN_MASTERY,
    MINIMUM_EASE_FACTOR,
)
from .errors import InvalidArgumentError
from .timeutils import Timestamp


class Quality(str, Enum):
    """Self-graded recall quality for a single response."""

    AGAIN = "again"
    HARD = "hard"
    GOOD = "good"
    EASY = "easy"

    @classmethod
    def parse(cls, value: "Quality | str") -> "Quality":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidArgumentError(
                f"Unknown quality {value!r}; expected one of "
                f"{', '.join(q.value for q in cls)}"
            ) from None

    @property
    def is_correct(self) -> bool:
        return self is not Quality.AGAIN


class DifficultyTier(str, Enum):
    """Fixed content difficulty, set when an item enters the learning set."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value: "DifficultyTier | str") -> "DifficultyTier":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidArgumentError(
                f"Unknown difficulty {value!r}; expected one of "
                f"{', '.join(d.value for d in cls)}"
            ) from None


@dataclass(frozen=True)
class ReviewState:
    """
    Scheduling record for one learnable item.

    Instances are immutable; the scheduling functions return new instances
    and the repository owns the authoritative copy.

    Attributes:
        item_id: Persistence key of the item.
        difficulty: Content difficulty tier.
        ease_factor: Interval growth coefficient (>= 1.3).
        review_count: Successful scheduling passes since the last reset.
        mastery_level: How well the item is known, 0.0-5.0.
        next_review_at: Epoch ms when the item is due under normal scheduling.
        last_review_at: Epoch ms of the last graded event.
        leitner_box: Escalation level, 1-5.
        hard_box_attempts: Consecutive failures while escalated.
        force_review_at: Epoch ms of a forced review, overriding next_review_at.
    """

    item_id: str
    difficulty: DifficultyTier
    next_review_at: Timestamp
    ease_factor: float = INITIAL_EASE_FACTOR
    review_count: int = 0
    mastery_level: float = 0.0
    last_review_at: Timestamp | None = None
    leitner_box: int = MIN_LEITNER_BOX
    hard_box_attempts: int = 0
    force_review_at: Timestamp | None = None

    def __post_init__(self):
        if not isinstance(self.difficulty, DifficultyTier):
            object.__setattr__(self, "difficulty", DifficultyTier.parse(self.difficulty))

        if self.review_count < 0:
            raise InvalidArgumentError(f"review_count must be >= 0, got {self.review_count}")
        if self.hard_box_attempts < 0:
            raise InvalidArgumentError(
                f"hard_box_attempts must be >= 0, got {self.hard_box_attempts}"
            )
        if not math.isfinite(self.ease_factor) or self.ease_factor < MINIMUM_EASE_FACTOR:
            raise InvalidArgumentError(
                f"ease_factor must be >= {MINIMUM_EASE_FACTOR}, got {self.ease_factor}"
            )
        if not MIN_MASTERY <= self.mastery_level <= MAX_MASTERY:
            raise InvalidArgumentError(
                f"mastery_level must be within [{MIN_MASTERY}, {MAX_MASTERY}], "
                f"got {self.mastery_level}"
            )
        if not MIN_LEITNER_BOX <= self.leitner_box <= LEITNER_BOXES:
            raise InvalidArgumentError(
                f"leitner_box must be within [{MIN_LEITNER_BOX}, {LEITNER_BOXES}], "
                f"got {self.leitner_box}"
            )

    @classmethod
    def new(cls, item_id: str, difficulty: DifficultyTier | str, now: Timestamp) -> "ReviewState":
        """Default state for an item entering the learning set, due immediately."""
        return cls(
            item_id=item_id,
            difficulty=DifficultyTier.parse(difficulty),
            next_review_at=now,
        )

    @property
    def is_forced(self) -> bool:
        return self.force_review_at is not None

    @property
    def effective_due_at(self) -> Timestamp:
        """Forced review time when set, otherwise the normal schedule."""
        if self.force_review_at is not None:
            return self.force_review_at
        return self.next_review_at


@dataclass(frozen=True)
class TrackerState:
    """Snapshot of the tracker counters, suitable for persistence."""

    total_reviews: int = 0
    correct_reviews: int = 0
    consecutive_correct: int = 0
    consecutive_incorrect: int = 0
    last_review_date: date | None = None
    learning_streak: int = 0

    def to_dict(self) -> dict:
        d = asdict(self)
        if self.last_review_date is not None:
            d["last_review_date"] = self.last_review_date.isoformat()
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "TrackerState":
        raw_date = data.get("last_review_date")
        return cls(
            total_reviews=int(data.get("total_reviews", 0)),
            correct_reviews=int(data.get("correct_reviews", 0)),
            consecutive_correct=int(data.get("consecutive_correct", 0)),
            consecutive_incorrect=int(data.get("consecutive_incorrect", 0)),
            last_review_date=date.fromisoformat(raw_date) if raw_date else None,
            learning_streak=int(data.get("learning_streak", 0)),
        )


@dataclass(frozen=True)
class EfficiencyStats:
    """Read-only view over a session's StatsTracker counters."""

    accuracy_percent: int
    total_reviews: int
    correct_reviews: int
    consecutive_correct: int
    consecutive_incorrect: int
    learning_streak: int
    last_review_date: date | None


@dataclass(frozen=True)
class Prediction:
    """
    Time-to-mastery estimate for a deck.

    estimated_days_to_master is None when nothing has been learned yet,
    i.e. the learning rate is zero and the estimate is unbounded.
    """

    total_words: int
    learned_words: int
    mastered_words: int
    progress_percentage: int
    avg_review_count: float
    daily_learning_rate: float
    estimated_days_to_master: float | None

    @property
    def is_unbounded(self) -> bool:
        return self.estimated_days_to_master is None


@dataclass(frozen=True)
class MasteryDistribution:
    not_started: int
    learning: int
    mastered: int


@dataclass
class ReviewPlan:
    """States bucketed by days until they are due."""

    due_now: list[ReviewState] = field(default_factory=list)
    this_week: list[ReviewState] = field(default_factory=list)
    this_month: list[ReviewState] = field(default_factory=list)
    later: list[ReviewState] = field(default_factory=list)


class RecordAction(str, Enum):
    """What a learning record logs about an item."""

    ADD = "add"
    LEARN = "learn"
    REVIEW = "review"


@dataclass(frozen=True)
class LearningRecord:
    """
    One entry of the learning log.

    ``learn`` marks an item's first correct recall; every other graded
    response is a ``review``. Adding an item logs ``add``.
    """

    item_id: str
    action: RecordAction
    at: Timestamp
    difficulty: DifficultyTier = DifficultyTier.MEDIUM
    quality: Quality | None = None

    def __post_init__(self):
        if not self.item_id:
            raise InvalidArgumentError("Learning record needs an item id")
        try:
            object.__setattr__(self, "action", RecordAction(self.action))
        except ValueError:
            raise InvalidArgumentError(f"Unknown record action {self.action!r}") from None
        object.__setattr__(self, "difficulty", DifficultyTier.parse(self.difficulty))
        if self.quality is not None:
            object.__setattr__(self, "quality", Quality.parse(self.quality))

    def to_dict(self) -> dict:
        return {
            "item_id": self.item_id,
            "action": self.action.value,
            "at": self.at,
            "difficulty": self.difficulty.value,
            "quality": self.quality.value if self.quality else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LearningRecord":
        return cls(
            item_id=data["item_id"],
            action=data["action"],
            at=int(data["at"]),
            difficulty=data.get("difficulty", "medium"),
            quality=data.get("quality"),
        )


@dataclass(frozen=True)
class DailyProgress:
    """Today's activity measured against the daily learning goal."""

    day: date
    added: int
    learned: int
    reviewed: int
    pending_review: int
    daily_goal: int
    goal_percent: int

    @property
    def goal_met(self) -> bool:
        return self.learned >= self.daily_goal
