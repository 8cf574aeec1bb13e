from dataclasses import dataclass
from datetime import datetime

from ..config import DEFAULT_EASE_FACTOR, DEFAULT_INTERVAL


@dataclass(frozen=True)
class SchedulingState:
    """Scheduling fields of a card as read from the store.

    A brand-new card is simply ``SchedulingState()``.
    """

    interval: int = DEFAULT_INTERVAL
    ease_factor: float = DEFAULT_EASE_FACTOR

    @classmethod
    def from_fields(cls, interval=None, ease_factor=None):
        # Unset fields fall back to the new-card defaults
        return cls(
            interval=DEFAULT_INTERVAL if interval is None else int(interval),
            ease_factor=DEFAULT_EASE_FACTOR if ease_factor is None else float(ease_factor),
        )


@dataclass(frozen=True)
class ScheduledReview:
    interval: int
    ease_factor: float
    next_review: datetime
