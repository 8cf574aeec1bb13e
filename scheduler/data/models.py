import uuid

from django.db import models
from django.utils import timezone

from ..config import DEFAULT_EASE_FACTOR, DEFAULT_INTERVAL


class Deck(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, default="")
    category = models.CharField(max_length=100, blank=True, default="")
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)
    last_studied = models.DateTimeField(null=True, blank=True)
    study_count = models.PositiveIntegerField(default=0)

    class Meta:
        app_label = "scheduler"


class Card(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    deck = models.ForeignKey(Deck, on_delete=models.CASCADE, related_name="cards")
    front = models.TextField()
    back = models.TextField()
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)
    # Scheduling state, populated with new-card defaults at creation
    interval = models.PositiveIntegerField(default=DEFAULT_INTERVAL)
    ease_factor = models.FloatField(default=DEFAULT_EASE_FACTOR)
    review_count = models.PositiveIntegerField(default=0)
    last_reviewed = models.DateTimeField(null=True, blank=True)
    next_review = models.DateTimeField(null=True, blank=True)  # NULL until first review

    class Meta:
        app_label = "scheduler"
        indexes = [
            models.Index(fields=["deck", "next_review"], name="card_deck_next_review_idx"),
        ]

class ReviewLog(models.Model):
    card = models.ForeignKey(Card, on_delete=models.CASCADE, related_name="reviews")
    quality = models.SmallIntegerField()
    idempotency_key = models.CharField(max_length=64)
    created_at = models.DateTimeField(default=timezone.now)
    interval = models.PositiveIntegerField()
    ease_factor = models.FloatField()
    next_review_at = models.DateTimeField()
    review_count = models.PositiveIntegerField(default=0)  # card review_count after this review

    class Meta:
        app_label = "scheduler"
        unique_together = (("card", "idempotency_key"),)
        indexes = [
            models.Index(fields=["card", "created_at"], name="reviewlog_card_created_idx"),
        ]

class StudySession(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    deck = models.ForeignKey(Deck, on_delete=models.CASCADE, related_name="sessions")
    date = models.DateTimeField(default=timezone.now)
    cards_studied = models.PositiveIntegerField()
    correct_answers = models.PositiveIntegerField()
    study_time_seconds = models.PositiveIntegerField()

    class Meta:
        app_label = "scheduler"
        indexes = [
            models.Index(fields=["deck", "date"], name="session_deck_date_idx"),
        ]
