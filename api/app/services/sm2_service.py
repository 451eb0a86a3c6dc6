"""
SM-2 (SuperMemo 2) scheduling service.

Pure functions mapping a card's scheduling state and a 0-5 review quality to
its next scheduling state. No I/O; callers persist the result.
"""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

from app.core.exceptions import ValidationError
from app.utils.time_utils import add_days

MIN_QUALITY = 0
MAX_QUALITY = 5
PASSING_QUALITY = 3

INITIAL_EASE_FACTOR = Decimal("2.5")
MIN_EASE_FACTOR = Decimal("1.3")
FAILURE_EASE_PENALTY = Decimal("0.2")
INITIAL_INTERVAL_DAYS = 1
SECOND_INTERVAL_DAYS = 6

_EASE_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class SchedulingState:
    """Scheduling state of a single card."""
    ease_factor: Decimal
    interval_days: int
    repetitions: int


def initial_state() -> SchedulingState:
    """State given to every newly created card."""
    return SchedulingState(
        ease_factor=INITIAL_EASE_FACTOR,
        interval_days=INITIAL_INTERVAL_DAYS,
        repetitions=0,
    )


def validate_quality(quality: int) -> int:
    """
    Ensure quality is an integer between 0 and 5.

    Raises:
        ValidationError: If quality is not an int or is out of range
    """
    if isinstance(quality, bool) or not isinstance(quality, int):
        raise ValidationError("Quality must be an integer between 0 and 5")
    if quality < MIN_QUALITY or quality > MAX_QUALITY:
        raise ValidationError("Quality must be between 0 and 5")
    return quality


def _to_decimal(value: Union[Decimal, float, int, str]) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _ease_adjustment(quality: int) -> Decimal:
    """SM-2 ease delta: 0.1 - (5 - q) * (0.08 + (5 - q) * 0.02)."""
    distance = Decimal(MAX_QUALITY - quality)
    return Decimal("0.1") - distance * (Decimal("0.08") + distance * Decimal("0.02"))


def _round_half_away_from_zero(value: Decimal) -> int:
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def next_state(current: SchedulingState, quality: int) -> SchedulingState:
    """
    Compute the next SM-2 scheduling state.

    Failure (quality < 3) restarts the card: repetitions 0, interval 1 day and
    ease factor lowered by 0.2. Success increments repetitions, adjusts the ease
    factor by the SM-2 formula and grows the interval: 1 day after the first
    success, 6 days after the second, then previous interval times the new
    ease factor. The ease factor never drops below 1.3.

    Args:
        current: Current scheduling state
        quality: Review quality (0-5)

    Returns:
        New scheduling state

    Raises:
        ValidationError: If quality is outside 0-5
    """
    validate_quality(quality)
    ease_factor = _to_decimal(current.ease_factor)

    if quality < PASSING_QUALITY:
        new_ease = max(MIN_EASE_FACTOR, ease_factor - FAILURE_EASE_PENALTY)
        return SchedulingState(
            ease_factor=new_ease.quantize(_EASE_PLACES),
            interval_days=INITIAL_INTERVAL_DAYS,
            repetitions=0,
        )

    repetitions = current.repetitions + 1
    new_ease = max(MIN_EASE_FACTOR, ease_factor + _ease_adjustment(quality)).quantize(_EASE_PLACES)

    if repetitions == 1:
        interval_days = INITIAL_INTERVAL_DAYS
    elif repetitions == 2:
        interval_days = SECOND_INTERVAL_DAYS
    else:
        interval_days = _round_half_away_from_zero(Decimal(current.interval_days) * new_ease)

    return SchedulingState(
        ease_factor=new_ease,
        interval_days=max(1, interval_days),
        repetitions=repetitions,
    )


def next_review_at(reviewed_at: datetime, interval_days: int) -> datetime:
    """Next review moment, always counted from the review itself rather than the old due date."""
    return add_days(reviewed_at, interval_days)
