from dataclasses import dataclass

from django.utils import timezone
import structlog
from ..data.repos import cards_by_due_date, create_session_record, due_cards
from ..data.models import Deck
from ..domain.logic import is_remembered, round_half_up, validate_quality

logger = structlog.get_logger()


def study_queue(deck_id):
    """Every card of the deck, most overdue first, never-reviewed cards leading."""
    Deck.objects.get(pk=deck_id)
    return list(cards_by_due_date(deck_id))


def due_queue(deck_id, now=None):
    Deck.objects.get(pk=deck_id)
    return list(due_cards(deck_id, now or timezone.now()))


@dataclass
class SessionTally:
    correct: int = 0
    incorrect: int = 0

    @property
    def total(self):
        return self.correct + self.incorrect

    def record(self, quality):
        if is_remembered(quality):
            self.correct += 1
        else:
            self.incorrect += 1

    @classmethod
    def from_qualities(cls, qualities):
        tally = cls()
        for quality in qualities:
            tally.record(quality)
        return tally


def complete_session(deck_id, qualities, started_at, now=None):
    """Store the Session Record for a finished pass over a deck."""
    for quality in qualities:
        validate_quality(quality)
    Deck.objects.get(pk=deck_id)

    now = now or timezone.now()
    tally = SessionTally.from_qualities(qualities)
    study_time_seconds = max(0, round_half_up((now - started_at).total_seconds()))

    session = create_session_record(
        deck_id,
        date=now,
        cards_studied=tally.total,
        correct_answers=tally.correct,
        study_time_seconds=study_time_seconds,
    )
    logger.info("session_recorded",
        deck_id=str(deck_id),
        session_id=str(session.pk),
        cards_studied=tally.total,
        correct=tally.correct,
        incorrect=tally.incorrect,
        study_time_seconds=study_time_seconds,
    )
    return session
