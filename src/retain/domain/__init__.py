# Domain Package
from .errors import InvalidArgumentError, ItemNotFoundError, RetainError, StoreError
from .models import (
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
    TrackerState,
)
from .ports import Clock, ReviewStateRepository

__all__ = [
    "Clock",
    "DailyProgress",
    "DifficultyTier",
    "EfficiencyStats",
    "InvalidArgumentError",
    "ItemNotFoundError",
    "LearningRecord",
    "MasteryDistribution",
    "Prediction",
    "Quality",
    "RecordAction",
    "RetainError",
    "ReviewPlan",
    "ReviewState",
    "ReviewStateRepository",
    "StoreError",
    "TrackerState",
]
