"""Centralized constants for the scheduling engine.

All magic numbers of the SM-2 / Leitner hybrid live here so every layer
imports from a single source of truth.
"""

# ---------- Time ----------
MS_PER_DAY = 24 * 60 * 60 * 1000

# ---------- SM-2 ----------
BASE_INTERVAL_DAYS = 1
GRADUATION_INTERVAL_DAYS = 6
MIN_INTERVAL_DAYS = 1
MAX_INTERVAL_DAYS = 365
INITIAL_EASE_FACTOR = 2.5
MINIMUM_EASE_FACTOR = 1.3

# ---------- Mastery ----------
MIN_MASTERY = 0.0
MAX_MASTERY = 5.0
MASTERED_THRESHOLD = 4.0

# ---------- Leitner ----------
MIN_LEITNER_BOX = 1
LEITNER_BOXES = 5
HARD_BOX_REVIEW_INTERVAL_DAYS = 1
MAX_HARD_BOX_ATTEMPTS = 3

# ---------- Queue Selector ----------
FORCED_REVIEW_BONUS = 100
MASTERY_WEIGHT = 10
REVIEW_COUNT_CEILING = 10
REVIEW_COUNT_WEIGHT = 5
URGENCY_WINDOW_DAYS = 20
DEFAULT_RECOMMEND_LIMIT = 20

# ---------- Review Plan ----------
WEEK_HORIZON_DAYS = 7
MONTH_HORIZON_DAYS = 30

# ---------- Progress ----------
MAX_DAILY_LEARNING_RATE = 20.0

# ---------- Daily Goal ----------
DEFAULT_DAILY_GOAL = 20
MAX_DAILY_GOAL = 100
