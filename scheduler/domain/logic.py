import math
from datetime import datetime
from numbers import Real

from .errors import InvalidQualityError
from .state import SchedulingState, ScheduledReview
from ..config import (
    FIRST_INTERVAL_DAYS,
    MAX_QUALITY,
    MIN_EASE_FACTOR,
    MIN_QUALITY,
    REMEMBERED_THRESHOLD,
    SECOND_INTERVAL_DAYS,
)
from ..utils.time import add_days


def is_remembered(quality) -> bool:
    return quality >= REMEMBERED_THRESHOLD


def validate_quality(quality):
    # bool is an int subclass but never a meaningful rating
    if isinstance(quality, bool) or not isinstance(quality, Real):
        raise InvalidQualityError(quality)
    if math.isnan(quality) or not MIN_QUALITY <= quality <= MAX_QUALITY:
        raise InvalidQualityError(quality)
    # Ratings are whole points on the scale
    if quality != int(quality):
        raise InvalidQualityError(quality)
    return quality


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def next_interval(interval: int, ease_factor: float, quality) -> int:
    if not is_remembered(quality):
        return 0
    if interval == 0:
        return FIRST_INTERVAL_DAYS
    if interval == 1:
        return SECOND_INTERVAL_DAYS
    return round_half_up(interval * ease_factor)


def next_ease_factor(ease_factor: float, quality) -> float:
    miss = 5 - quality
    return max(MIN_EASE_FACTOR, ease_factor + (0.1 - miss * (0.08 + miss * 0.02)))


def compute_next_review(state: SchedulingState, quality, now: datetime) -> ScheduledReview:
    """SM-2 transition for one review.

    ``quality`` is not range-checked here; callers validate it at their
    boundary with ``validate_quality``. ``now`` is the instant the review is
    processed and the only source of time.
    """
    interval = next_interval(state.interval, state.ease_factor, quality)
    return ScheduledReview(
        interval=interval,
        ease_factor=next_ease_factor(state.ease_factor, quality),
        next_review=add_days(now, interval),
    )
