import pytest

from retain.application.scheduling.interval_model import compute_interval
from retain.domain.errors import InvalidArgumentError
from retain.domain.models import DifficultyTier


def test_first_pass_uses_base_interval():
    assert compute_interval(0, 2.5, DifficultyTier.MEDIUM) == 1
    assert compute_interval(0, 2.5, DifficultyTier.HARD) == 1


def test_second_pass_graduates_to_six_days():
    """The one-review step bypasses ease and difficulty entirely."""
    assert compute_interval(1, 1.3, DifficultyTier.EASY) == 6
    assert compute_interval(1, 2.5, DifficultyTier.HARD) == 6


@pytest.mark.parametrize(
    "review_count, ease_factor, difficulty, expected",
    [
        (2, 2.5, DifficultyTier.MEDIUM, 5),
        (2, 2.5, DifficultyTier.EASY, 4),
        (2, 1.3, DifficultyTier.EASY, 2),  # 2.08
        (3, 2.48, DifficultyTier.HARD, 11),  # 11.16
        (4, 2.47, DifficultyTier.MEDIUM, 10),  # 9.88
    ],
)
def test_later_passes_scale_with_ease_count_and_difficulty(
    review_count, ease_factor, difficulty, expected
):
    assert compute_interval(review_count, ease_factor, difficulty) == expected


@pytest.mark.parametrize(
    "review_count, difficulty, expected",
    [
        (3, DifficultyTier.MEDIUM, 8),  # 7.5
        (5, DifficultyTier.MEDIUM, 13),  # 12.5
        (2, DifficultyTier.HARD, 8),  # 7.5
    ],
)
def test_halves_round_up(review_count, difficulty, expected):
    assert compute_interval(review_count, 2.5, difficulty) == expected


def test_interval_is_capped_at_a_year():
    assert compute_interval(100, 2.5, DifficultyTier.HARD) == 365
    assert compute_interval(10_000, 5.0, DifficultyTier.EASY) == 365


def test_interval_never_drops_below_one_day():
    assert compute_interval(2, 0.1, DifficultyTier.EASY) == 1


def test_difficulty_may_be_given_by_name():
    assert compute_interval(2, 2.5, "hard") == compute_interval(2, 2.5, DifficultyTier.HARD)


@pytest.mark.parametrize("review_count", range(0, 60, 3))
@pytest.mark.parametrize("ease_factor", [1.3, 1.85, 2.5, 3.7])
@pytest.mark.parametrize("difficulty", list(DifficultyTier))
def test_interval_always_within_bounds(review_count, ease_factor, difficulty):
    assert 1 <= compute_interval(review_count, ease_factor, difficulty) <= 365


def test_negative_review_count_is_rejected():
    with pytest.raises(InvalidArgumentError):
        compute_interval(-1, 2.5, DifficultyTier.MEDIUM)


def test_unknown_difficulty_is_rejected():
    with pytest.raises(InvalidArgumentError):
        compute_interval(2, 2.5, "brutal")
