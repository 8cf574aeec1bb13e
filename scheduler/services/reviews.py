from dataclasses import dataclass
from datetime import datetime

from django.db import transaction
from django.utils import timezone
import structlog
from ..data.repos import (
    get_card_for_update,
    get_existing_review,
    persist_review,
    save_scheduled_review,
    touch_deck,
)
from ..domain.logic import compute_next_review, validate_quality
from ..domain.state import SchedulingState
from ..utils.time import to_local_iso

logger = structlog.get_logger()


@dataclass(frozen=True)
class ReviewResult:
    card_id: object
    quality: int
    interval: int
    ease_factor: float
    review_count: int
    last_reviewed: datetime
    next_review: datetime
    idempotent: bool


def _result_from_log(log, idempotent):
    return ReviewResult(
        card_id=log.card_id,
        quality=log.quality,
        interval=log.interval,
        ease_factor=log.ease_factor,
        review_count=log.review_count,
        last_reviewed=log.created_at,
        next_review=log.next_review_at,
        idempotent=idempotent,
    )


def record_review(card_id, quality, idempotency_key: str, now=None) -> ReviewResult:
    """Apply one learner answer to a card and persist the new schedule.

    Raises InvalidQualityError for ratings outside 0-5 and Card.DoesNotExist
    for unknown cards. ``now`` defaults to the current time.
    """
    quality = int(validate_quality(quality))
    logger.info("review_received",
        card_id=str(card_id),
        quality=quality,
        idempotency_key=idempotency_key,
    )

    # Fast path: return previous result if same idempotency_key
    existing = get_existing_review(card_id, idempotency_key)
    if existing:
        logger.info("idempotent_reuse",
            card_id=str(card_id),
            next_review_utc=existing.next_review_at.isoformat(),
        )
        return _result_from_log(existing, True)

    now = now or timezone.now()
    with transaction.atomic():
        # Serialize schedule update per card
        card = get_card_for_update(card_id)
        state = SchedulingState.from_fields(card.interval, card.ease_factor)
        scheduled = compute_next_review(state, quality, now)

        log, was_idempotent = persist_review(
            card, quality, idempotency_key, scheduled, now, card.review_count + 1
        )
        if was_idempotent:
            logger.info("idempotent_race", card_id=str(card_id))
            return _result_from_log(log, True)

        save_scheduled_review(card, scheduled, now)
        touch_deck(card.deck_id, now)

    logger.info("review_scheduled",
        card_id=str(card_id),
        interval_days=scheduled.interval,
        ease_factor=scheduled.ease_factor,
        review_count=card.review_count,
        next_review_utc=scheduled.next_review.isoformat(),
        next_review_local=to_local_iso(scheduled.next_review),
    )

    return ReviewResult(
        card_id=card.pk,
        quality=quality,
        interval=scheduled.interval,
        ease_factor=scheduled.ease_factor,
        review_count=card.review_count,
        last_reviewed=now,
        next_review=scheduled.next_review,
        idempotent=False,
    )
