from rest_framework import serializers

from ..data.models import Card, Deck, StudySession
from ..domain.errors import InvalidQualityError
from ..domain.logic import validate_quality


def _check_quality(value):
    try:
        return validate_quality(value)
    except InvalidQualityError as e:
        raise serializers.ValidationError(str(e), code="invalid_quality")


class ReviewInSerializer(serializers.Serializer):
    card_id = serializers.UUIDField()
    quality = serializers.IntegerField(validators=[_check_quality])
    idempotency_key = serializers.CharField(max_length=64)

class DueQuerySerializer(serializers.Serializer):
    until = serializers.DateTimeField(required=False)  # ISO-8601

class SessionInSerializer(serializers.Serializer):
    started_at = serializers.DateTimeField()
    qualities = serializers.ListField(
        child=serializers.IntegerField(validators=[_check_quality]), allow_empty=True
    )

class StatisticsQuerySerializer(serializers.Serializer):
    deck_id = serializers.UUIDField(required=False)

class DeckSerializer(serializers.ModelSerializer):
    class Meta:
        model = Deck
        fields = [
            "id", "name", "description", "category", "created_at", "updated_at",
            "last_studied", "study_count",
        ]
        read_only_fields = ["id", "created_at", "updated_at", "last_studied", "study_count"]

class CardSerializer(serializers.ModelSerializer):
    class Meta:
        model = Card
        fields = [
            "id", "deck", "front", "back", "created_at", "updated_at",
            "interval", "ease_factor", "review_count", "last_reviewed", "next_review",
        ]
        # Scheduling state is only ever written by the review service
        read_only_fields = [
            "id", "deck", "created_at", "updated_at",
            "interval", "ease_factor", "review_count", "last_reviewed", "next_review",
        ]

class StudySessionSerializer(serializers.ModelSerializer):
    class Meta:
        model = StudySession
        fields = ["id", "deck", "date", "cards_studied", "correct_answers", "study_time_seconds"]
