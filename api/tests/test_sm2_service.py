"""
Tests for the SM-2 scheduler.
"""
from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from app.core.exceptions import ValidationError
from app.services.sm2_service import (
    INITIAL_EASE_FACTOR,
    MIN_EASE_FACTOR,
    SchedulingState,
    initial_state,
    next_review_at,
    next_state,
    validate_quality,
)


def state(ease, interval, repetitions):
    return SchedulingState(ease_factor=Decimal(ease), interval_days=interval, repetitions=repetitions)


class TestInitialState:

    def test_initial_values(self):
        initial = initial_state()
        assert initial.ease_factor == Decimal("2.5")
        assert initial.interval_days == 1
        assert initial.repetitions == 0

    def test_constants(self):
        assert INITIAL_EASE_FACTOR == Decimal("2.5")
        assert MIN_EASE_FACTOR == Decimal("1.3")


class TestFailedReview:

    @pytest.mark.parametrize("quality", [0, 1, 2])
    def test_failure_resets_repetitions_and_interval(self, quality):
        result = next_state(state("2.5", 15, 4), quality)
        assert result.repetitions == 0
        assert result.interval_days == 1
        assert result.ease_factor == Decimal("2.30")

    def test_failure_ease_is_floored(self):
        result = next_state(state("1.4", 6, 2), 0)
        assert result.ease_factor == Decimal("1.30")

    def test_failure_at_floor_stays_at_floor(self):
        result = next_state(state("1.3", 1, 0), 1)
        assert result.ease_factor == Decimal("1.30")


class TestSuccessfulReview:

    def test_first_success_gives_one_day(self):
        result = next_state(initial_state(), 4)
        assert result.repetitions == 1
        assert result.interval_days == 1
        assert result.ease_factor == Decimal("2.50")

    def test_second_success_gives_six_days(self):
        result = next_state(state("2.5", 1, 1), 4)
        assert result.repetitions == 2
        assert result.interval_days == 6

    def test_quality_four_on_third_repetition(self):
        result = next_state(state("2.5", 6, 2), 4)
        assert result.repetitions == 3
        assert result.ease_factor == Decimal("2.50")
        assert result.interval_days == 15

    def test_quality_five_on_third_repetition(self):
        result = next_state(state("2.5", 6, 2), 5)
        assert result.repetitions == 3
        assert result.ease_factor == Decimal("2.60")
        assert result.interval_days == 16

    def test_quality_three_lowers_ease(self):
        # 0.1 - 2 * (0.08 + 2 * 0.02) = -0.14
        result = next_state(state("2.5", 6, 2), 3)
        assert result.ease_factor == Decimal("2.36")
        assert result.interval_days == 14  # round(6 * 2.36 = 14.16)

    def test_interval_rounds_half_away_from_zero(self):
        # 5 * 2.5 = 12.5 -> 13
        result = next_state(state("2.5", 5, 3), 4)
        assert result.interval_days == 13

    def test_ease_is_floored_on_success(self):
        result = next_state(state("1.3", 10, 5), 3)
        assert result.ease_factor == Decimal("1.30")
        assert result.interval_days == 13

    def test_accepts_float_ease_factor(self):
        result = next_state(SchedulingState(ease_factor=2.5, interval_days=6, repetitions=2), 5)
        assert result.ease_factor == Decimal("2.60")

    @pytest.mark.parametrize("quality", [3, 4, 5])
    def test_success_increments_repetitions(self, quality):
        result = next_state(state("2.5", 20, 7), quality)
        assert result.repetitions == 8
        assert result.interval_days >= 1


class TestQualityValidation:

    @pytest.mark.parametrize("quality", [-1, 6, 100])
    def test_out_of_range_is_rejected(self, quality):
        with pytest.raises(ValidationError, match="between 0 and 5"):
            next_state(initial_state(), quality)

    @pytest.mark.parametrize("quality", [2.5, "3", None, True])
    def test_non_integer_is_rejected(self, quality):
        with pytest.raises(ValidationError):
            validate_quality(quality)

    @pytest.mark.parametrize("quality", [0, 5])
    def test_bounds_are_accepted(self, quality):
        assert validate_quality(quality) == quality


def test_next_review_at_is_counted_from_review_time():
    reviewed_at = datetime(2026, 1, 10, 8, 30)
    assert next_review_at(reviewed_at, 6) == reviewed_at + timedelta(days=6)
