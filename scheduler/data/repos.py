from django.db import transaction, IntegrityError
from django.db.models import F
from django.db.models import Q
from .models import Card, Deck, ReviewLog, StudySession


def get_card_for_update(card_id):
    """
    Fetch the card row and lock it until the caller's transaction ends.
    Raises Card.DoesNotExist.
    """
    return Card.objects.select_for_update().get(pk=card_id)


def get_existing_review(card_id, idem_key):
    return ReviewLog.objects.filter(
        card_id=card_id, idempotency_key=idem_key
    ).first()


def save_scheduled_review(card, scheduled, reviewed_at):
    card.interval = scheduled.interval
    card.ease_factor = scheduled.ease_factor
    card.next_review = scheduled.next_review
    card.last_reviewed = reviewed_at
    card.review_count = card.review_count + 1
    card.save(update_fields=[
        "interval", "ease_factor", "next_review", "last_reviewed", "review_count", "updated_at",
    ])
    return card


def persist_review(card, quality, idem_key, scheduled, reviewed_at, review_count):
    """
    Insert ReviewLog; if a concurrent duplicate slips in, return the existing one.
    """
    try:
        with transaction.atomic():
            return ReviewLog.objects.create(
                card=card, quality=quality, idempotency_key=idem_key,
                created_at=reviewed_at, interval=scheduled.interval,
                ease_factor=scheduled.ease_factor, next_review_at=scheduled.next_review,
                review_count=review_count,
            ), False
    except IntegrityError:
        # Duplicate idempotency key safeguard
        existing = get_existing_review(card.pk, idem_key)
        return existing, True


def touch_deck(deck_id, studied_at):
    Deck.objects.filter(pk=deck_id).update(
        study_count=F("study_count") + 1, last_studied=studied_at
    )


def _by_due_date(qs):
    # Never-reviewed cards (NULL next_review) sort first
    return qs.order_by(F("next_review").asc(nulls_first=True), "created_at", "pk")


def cards_by_due_date(deck_id):
    return _by_due_date(Card.objects.filter(deck_id=deck_id))


def due_cards(deck_id, until):
    return _by_due_date(
        Card.objects.filter(deck_id=deck_id).filter(
            Q(next_review__isnull=True) | Q(next_review__lte=until)
        )
    )


def create_session_record(deck_id, date, cards_studied, correct_answers, study_time_seconds):
    return StudySession.objects.create(
        deck_id=deck_id, date=date, cards_studied=cards_studied,
        correct_answers=correct_answers, study_time_seconds=study_time_seconds,
    )


def session_records(deck_id=None):
    qs = StudySession.objects.all()
    if deck_id is not None:
        qs = qs.filter(deck_id=deck_id)
    return qs.order_by("date")
