from datetime import datetime, timezone

import pytest

from retain.domain.constants import MS_PER_DAY
from retain.domain.models import DifficultyTier, ReviewState
from retain.infrastructure.clock import FixedClock

# 2024-03-01T08:00:00Z
T0 = int(datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc).timestamp() * 1000)
DAY = MS_PER_DAY


@pytest.fixture
def now():
    return T0


@pytest.fixture
def clock():
    """A frozen clock at T0; tests move it explicitly."""
    return FixedClock(T0)


@pytest.fixture
def make_state():
    """Factory for review states with sensible defaults."""

    def _make(item_id="word", difficulty=DifficultyTier.MEDIUM, next_review_at=T0, **kwargs):
        return ReviewState(
            item_id=item_id,
            difficulty=difficulty,
            next_review_at=next_review_at,
            **kwargs,
        )

    return _make


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config and deck files
    monkeypatch.setenv("HOME", str(home))
    for var in (
        "RETAIN_BACKEND",
        "RETAIN_STORE_PATH",
        "RETAIN_POLICY",
        "RETAIN_RECOMMEND_LIMIT",
        "RETAIN_DAILY_GOAL",
    ):
        monkeypatch.delenv(var, raising=False)
    return home
