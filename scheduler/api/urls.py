from django.urls import path
from .views import (
    CardCreateView,
    DeckListView,
    DueCardsView,
    ReviewView,
    StatisticsView,
    StudyQueueView,
    StudySessionView,
)

urlpatterns = [
    path("decks", DeckListView.as_view(), name="decks"),
    path("decks/<uuid:deck_id>/cards", CardCreateView.as_view(), name="deck-cards"),
    path("decks/<uuid:deck_id>/study-queue", StudyQueueView.as_view(), name="study-queue"),
    path("decks/<uuid:deck_id>/due-cards", DueCardsView.as_view(), name="due-cards"),
    path("decks/<uuid:deck_id>/sessions", StudySessionView.as_view(), name="sessions"),
    path("reviews", ReviewView.as_view(), name="review"),
    path("statistics", StatisticsView.as_view(), name="statistics"),
]
