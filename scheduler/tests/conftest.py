import pytest

from scheduler.data.models import Card, Deck


@pytest.fixture
def deck(db):
    return Deck.objects.create(name="Spanish verbs", description="Irregular preterite forms")


@pytest.fixture
def make_card(deck):
    def _make(front="tener", back="tuve", **fields):
        return Card.objects.create(deck=deck, front=front, back=back, **fields)
    return _make
