import pytest

from retain.application.scheduling.engine import grade_response
from retain.domain.errors import InvalidArgumentError
from retain.domain.models import DifficultyTier, Quality

from ...conftest import DAY, T0


def test_good_on_new_item_graduates(make_state):
    """Scenario A: the six-day step fires on the post-increment count."""
    state = make_state(review_count=0, ease_factor=2.5, difficulty=DifficultyTier.MEDIUM)

    result = grade_response(state, Quality.GOOD, T0)

    assert result.review_count == 1
    assert result.ease_factor == pytest.approx(2.52)
    assert result.mastery_level == 0.5
    assert result.next_review_at == T0 + 6 * DAY
    assert result.last_review_at == T0


def test_again_resets_to_base_interval(make_state):
    """Scenario B."""
    state = make_state(
        review_count=2, ease_factor=2.5, mastery_level=2.0, difficulty=DifficultyTier.HARD
    )

    result = grade_response(state, Quality.AGAIN, T0)

    assert result.ease_factor == pytest.approx(1.85)
    assert result.review_count == 0
    assert result.mastery_level == 1.0
    assert result.next_review_at == T0 + DAY


def test_hard_keeps_count_but_at_least_one(make_state):
    fresh = grade_response(make_state(review_count=0, mastery_level=1.0), Quality.HARD, T0)
    assert fresh.review_count == 1
    assert fresh.ease_factor == pytest.approx(2.5 * 0.85 - 0.05)
    assert fresh.mastery_level == 0.5
    assert fresh.next_review_at == T0 + 6 * DAY

    seasoned = grade_response(make_state(review_count=4), Quality.HARD, T0)
    assert seasoned.review_count == 4


def test_good_on_seasoned_hard_item(make_state):
    state = make_state(review_count=2, ease_factor=2.5, difficulty=DifficultyTier.HARD)

    result = grade_response(state, Quality.GOOD, T0)

    # ease 2.5 + 0.1 - (0.08 + 0.04) = 2.48; interval round(2.48 * 3 * 1.5) = 11
    assert result.ease_factor == pytest.approx(2.48)
    assert result.review_count == 3
    assert result.next_review_at == T0 + 11 * DAY


def test_easy_adds_full_mastery_point(make_state):
    state = make_state(review_count=3, ease_factor=2.5, mastery_level=2.0)

    result = grade_response(state, Quality.EASY, T0)

    # ease 2.5 + 0.15 - (0.15 + 0.03) = 2.47; interval round(2.47 * 4) = 10
    assert result.ease_factor == pytest.approx(2.47)
    assert result.review_count == 4
    assert result.mastery_level == 3.0
    assert result.next_review_at == T0 + 10 * DAY


def test_ease_never_falls_below_floor(make_state):
    result = grade_response(make_state(ease_factor=1.3), Quality.AGAIN, T0)
    assert result.ease_factor == 1.3


def test_mastery_is_clamped(make_state):
    assert grade_response(make_state(mastery_level=5.0), Quality.EASY, T0).mastery_level == 5.0
    assert grade_response(make_state(mastery_level=4.8), Quality.GOOD, T0).mastery_level == 5.0
    assert grade_response(make_state(mastery_level=0.0), Quality.AGAIN, T0).mastery_level == 0.0
    assert grade_response(make_state(mastery_level=0.3), Quality.HARD, T0).mastery_level == 0.0


def test_leitner_fields_pass_through(make_state):
    state = make_state(leitner_box=3, hard_box_attempts=2, force_review_at=T0 + DAY)

    result = grade_response(state, Quality.GOOD, T0)

    assert result.leitner_box == 3
    assert result.hard_box_attempts == 2
    assert result.force_review_at == T0 + DAY
    assert result.difficulty is state.difficulty
    assert result.item_id == state.item_id


def test_input_state_is_left_untouched(make_state):
    state = make_state(review_count=2)
    grade_response(state, Quality.EASY, T0)
    assert state.review_count == 2
    assert state.last_review_at is None


def test_quality_may_be_given_by_name(make_state):
    state = make_state()
    assert grade_response(state, "good", T0) == grade_response(state, Quality.GOOD, T0)


@pytest.mark.parametrize("quality", ["", "meh", "0", None])
def test_unknown_quality_fails_fast(make_state, quality):
    with pytest.raises(InvalidArgumentError):
        grade_response(make_state(), quality, T0)


STATES = [
    {"ease_factor": 1.3, "review_count": 0, "mastery_level": 0.0},
    {"ease_factor": 1.31, "review_count": 1, "mastery_level": 0.5},
    {"ease_factor": 2.5, "review_count": 2, "mastery_level": 2.5},
    {"ease_factor": 2.5, "review_count": 30, "mastery_level": 5.0},
    {"ease_factor": 4.0, "review_count": 200, "mastery_level": 4.5},
]


@pytest.mark.parametrize("fields", STATES)
@pytest.mark.parametrize("quality", list(Quality))
@pytest.mark.parametrize("difficulty", list(DifficultyTier))
def test_invariants_hold_for_every_quality(make_state, fields, quality, difficulty):
    result = grade_response(make_state(difficulty=difficulty, **fields), quality, T0)

    assert result.ease_factor >= 1.3
    assert 0 <= result.mastery_level <= 5
    assert result.review_count >= 0
    assert T0 + DAY <= result.next_review_at <= T0 + 365 * DAY
    assert result.last_review_at == T0
