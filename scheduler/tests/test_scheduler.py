import pytest
import logging
from django.urls import reverse
from django.utils import timezone
from datetime import timedelta
import uuid
from unittest.mock import MagicMock

import scheduler.api.views as api_views
from scheduler.api.exceptions import exception_handler
from scheduler.data.models import Deck, StudySession
from scheduler.domain.errors import InvalidQualityError

logger = logging.getLogger(__name__)

# Helpers

def make_review(client, card_id, quality, idem_key):
    url = reverse("review")
    payload = {
        "card_id": str(card_id),
        "quality": quality,
        "idempotency_key": idem_key,
    }
    resp = client.post(url, data=payload, content_type="application/json")
    data = resp.json()
    logger.info(
        "POST /reviews quality=%s → status=%s interval=%s idempotent=%s",
        quality,
        resp.status_code,
        data.get("interval"),
        data.get("idempotent"),
    )
    return resp


def get_due_cards(client, deck_id, until):
    url = reverse("due-cards", kwargs={"deck_id": str(deck_id)})
    resp = client.get(url, {"until": until.isoformat()})
    data = resp.json()
    logger.info(
        "GET /due-cards until=%s → status=%s card_count=%s",
        until.isoformat(),
        resp.status_code,
        len(data["card_ids"]),
    )
    return resp


# Tests

@pytest.mark.django_db
def test_create_deck_and_card_with_default_schedule(client):
    resp = client.post(reverse("decks"), data={"name": "Kanji N5"}, content_type="application/json")
    assert resp.status_code == 201
    deck_id = resp.json()["id"]

    url = reverse("deck-cards", kwargs={"deck_id": deck_id})
    resp = client.post(
        url,
        data={"front": "水", "back": "water", "interval": 40, "ease_factor": 9},
        content_type="application/json",
    )
    card = resp.json()

    assert resp.status_code == 201
    # Scheduling fields cannot be set by the author
    assert card["interval"] == 0
    assert card["ease_factor"] == 2.5
    assert card["review_count"] == 0
    assert card["next_review"] is None
    assert card["last_reviewed"] is None


@pytest.mark.django_db
def test_card_for_unknown_deck_is_404(client):
    url = reverse("deck-cards", kwargs={"deck_id": str(uuid.uuid4())})
    resp = client.post(url, data={"front": "a", "back": "b"}, content_type="application/json")
    assert resp.status_code == 404


@pytest.mark.django_db
def test_first_easy_review(client, make_card):
    """New card answered Easy is due again tomorrow with more ease."""
    card = make_card()

    resp = make_review(client, card.pk, 5, "idem-1")
    data = resp.json()

    assert resp.status_code == 201
    assert data["interval"] == 1
    assert data["ease_factor"] == pytest.approx(2.6)
    assert data["review_count"] == 1
    assert data["quality_label"] == "Easy"
    assert data["remembered"] is True

    card.refresh_from_db()
    assert card.next_review - card.last_reviewed == timedelta(days=1)
    assert data["next_review_utc"] == card.next_review.isoformat()


@pytest.mark.django_db
def test_hard_review_resets_interval(client, make_card):
    card = make_card(interval=6, ease_factor=2.7)

    data = make_review(client, card.pk, 1, "idem-hard").json()

    assert data["interval"] == 0
    assert data["ease_factor"] == pytest.approx(2.16)
    assert data["quality_label"] == "Hard"
    assert data["remembered"] is False
    card.refresh_from_db()
    assert card.next_review == card.last_reviewed


@pytest.mark.django_db
def test_learning_sequence(client, make_card):
    """Consecutive Easy answers step through 1, 6 then round(6 x ease) days."""
    card = make_card()

    intervals = []
    for i in range(3):
        resp = make_review(client, card.pk, 5, f"idem-seq-{i}")
        intervals.append(resp.json()["interval"])

    assert intervals == [1, 6, 16]
    logger.info("✓ Passed: learning sequence %s", intervals)


@pytest.mark.django_db
def test_programmatic_quality_has_no_label(client, make_card):
    card = make_card(interval=1)
    data = make_review(client, card.pk, 4, "idem-4").json()

    assert data["interval"] == 6
    assert data["quality_label"] is None
    assert data["ease_factor"] == pytest.approx(2.5)


@pytest.mark.django_db
def test_idempotency_true_and_false(client, make_card):
    """First request creates, second with same key reuses."""
    card = make_card()

    first = make_review(client, card.pk, 5, "idem-same")
    d1 = first.json()
    assert first.status_code == 201
    assert d1["idempotent"] is False

    second = make_review(client, card.pk, 5, "idem-same")
    d2 = second.json()
    assert second.status_code == 200
    assert d2["idempotent"] is True
    assert d1["next_review_utc"] == d2["next_review_utc"]

    card.refresh_from_db()
    assert card.review_count == 1


@pytest.mark.django_db
@pytest.mark.parametrize("quality", [-1, 6, 10, "great"])
def test_out_of_range_quality_is_rejected(client, make_card, quality):
    card = make_card()

    resp = make_review(client, card.pk, quality, "idem-bad")

    assert resp.status_code == 400
    assert "quality" in resp.json()
    card.refresh_from_db()
    assert card.review_count == 0


@pytest.mark.django_db
def test_review_of_unknown_card_is_404(client):
    resp = make_review(client, uuid.uuid4(), 3, "idem-missing")
    assert resp.status_code == 404
    assert resp.json()["code"] == "not_found"


def test_invalid_quality_error_maps_to_400():
    resp = exception_handler(InvalidQualityError(9), {})
    assert resp.status_code == 400
    assert resp.data["code"] == "invalid_quality"


@pytest.mark.django_db
def test_due_cards_includes_and_excludes(client, deck, make_card):
    """Due cards are the never-reviewed and the ones due by 'until'."""
    fresh = make_card(front="fresh")
    failed = make_card(front="failed")
    learned = make_card(front="learned", interval=10)

    make_review(client, failed.pk, 1, "idem-failed")
    make_review(client, learned.pk, 5, "idem-learned")

    resp = get_due_cards(client, deck.pk, timezone.now() + timedelta(minutes=2))
    assert resp.json()["card_ids"] == [str(fresh.pk), str(failed.pk)]

    # Never reviewed cards are due since forever
    resp = get_due_cards(client, deck.pk, timezone.now() - timedelta(days=1))
    assert resp.json()["card_ids"] == [str(fresh.pk)]

    resp = get_due_cards(client, deck.pk, timezone.now() + timedelta(days=30))
    assert len(resp.json()["card_ids"]) == 3


@pytest.mark.django_db
def test_due_cards_defaults_until_to_now(client, deck, make_card):
    card = make_card()
    resp = client.get(reverse("due-cards", kwargs={"deck_id": str(deck.pk)}))
    assert resp.status_code == 200
    assert resp.json()["card_ids"] == [str(card.pk)]


@pytest.mark.django_db
def test_study_queue_sorted_by_next_review(client, deck, make_card):
    now = timezone.now()
    b = make_card(front="b", next_review=now + timedelta(days=2))
    a = make_card(front="a", next_review=now - timedelta(days=2))
    new = make_card(front="new")

    resp = client.get(reverse("study-queue", kwargs={"deck_id": str(deck.pk)}))
    assert resp.status_code == 200
    assert [c["id"] for c in resp.json()["cards"]] == [str(new.pk), str(a.pk), str(b.pk)]


@pytest.mark.django_db
def test_study_queue_unknown_deck_is_404(client):
    resp = client.get(reverse("study-queue", kwargs={"deck_id": str(uuid.uuid4())}))
    assert resp.status_code == 404


@pytest.mark.django_db
def test_review_updates_deck_study_stats(client, deck, make_card):
    card = make_card()
    make_review(client, card.pk, 3, "idem-a")
    make_review(client, card.pk, 3, "idem-b")

    deck.refresh_from_db()
    assert deck.study_count == 2
    assert deck.last_studied is not None


@pytest.mark.django_db
def test_record_study_session(client, deck):
    url = reverse("sessions", kwargs={"deck_id": str(deck.pk)})
    started = timezone.now() - timedelta(seconds=90)
    payload = {"started_at": started.isoformat(), "qualities": [1, 2, 3, 5]}

    resp = client.post(url, data=payload, content_type="application/json")
    data = resp.json()

    assert resp.status_code == 201
    assert data["deck"] == str(deck.pk)
    assert data["cards_studied"] == 4
    assert data["correct_answers"] == 2
    assert 90 <= data["study_time_seconds"] <= 95
    assert StudySession.objects.filter(deck=deck).count() == 1


@pytest.mark.django_db
def test_study_session_rejects_bad_quality(client, deck):
    url = reverse("sessions", kwargs={"deck_id": str(deck.pk)})
    payload = {"started_at": timezone.now().isoformat(), "qualities": [3, 8]}

    resp = client.post(url, data=payload, content_type="application/json")
    assert resp.status_code == 400
    assert not StudySession.objects.exists()


@pytest.mark.django_db
def test_statistics_summary(client, deck):
    now = timezone.now()
    StudySession.objects.create(deck=deck, date=now, cards_studied=10, correct_answers=7, study_time_seconds=120)
    StudySession.objects.create(
        deck=deck, date=now - timedelta(days=1), cards_studied=10, correct_answers=8, study_time_seconds=60
    )

    data = client.get(reverse("statistics")).json()

    assert data["total_cards"] == 20
    assert data["total_sessions"] == 2
    assert data["total_time_seconds"] == 180
    assert data["average_accuracy"] == 75
    assert data["study_days"] == 2
    assert data["current_streak"] == 2
    assert data["longest_streak"] == 2


@pytest.mark.django_db
def test_statistics_filtered_by_deck(client, deck):
    other = Deck.objects.create(name="Other")
    StudySession.objects.create(deck=other, cards_studied=3, correct_answers=3, study_time_seconds=10)

    data = client.get(reverse("statistics"), {"deck_id": str(deck.pk)}).json()
    assert data["total_sessions"] == 0
    assert data["average_accuracy"] == 0
    assert data["current_streak"] == 0


@pytest.mark.django_db
def test_replay_reports_stored_quality(client, make_card):
    """A retried key with a different quality still describes the applied review."""
    card = make_card()

    make_review(client, card.pk, 5, "idem-label")
    data = make_review(client, card.pk, 1, "idem-label").json()

    assert data["idempotent"] is True
    assert data["interval"] == 1
    assert data["quality_label"] == "Easy"
    assert data["remembered"] is True


@pytest.mark.django_db
def test_statistics_logs_response(client, deck, monkeypatch):
    fake_logger = MagicMock()
    monkeypatch.setattr(api_views, "base_logger", fake_logger)

    client.get(reverse("statistics"), {"deck_id": str(deck.pk)})

    bound = fake_logger.bind.return_value
    bound.info.assert_called_once()
    event, fields = bound.info.call_args.args[0], bound.info.call_args.kwargs
    assert event == "statistics_api_response"
    assert fields["deck_id"] == str(deck.pk)
    assert fields["total_sessions"] == 0
