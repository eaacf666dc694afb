# Application Stats Package
from .daily import daily_progress
from .predictor import mastery_distribution, predict
from .tracker import StatsTracker

__all__ = ["StatsTracker", "daily_progress", "predict", "mastery_distribution"]
