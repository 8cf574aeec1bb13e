from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import views, status
from rest_framework.response import Response
import structlog
import uuid
from ..services.reviews import record_review
from ..services.sessions import complete_session, due_queue, study_queue
from ..services.statistics import summarize
from ..data.models import Deck
from ..data.repos import session_records
from ..domain.enums import ANSWER_LABELS
from ..domain.logic import is_remembered
from ..utils.time import to_local_iso, to_utc_iso
from .serializers import (
    CardSerializer,
    DeckSerializer,
    DueQuerySerializer,
    ReviewInSerializer,
    SessionInSerializer,
    StatisticsQuerySerializer,
    StudySessionSerializer,
)

base_logger = structlog.get_logger()


def _request_logger():
    # Create a unique request_id
    return base_logger.bind(request_id=str(uuid.uuid4()))


class DeckListView(views.APIView):
    def post(self, request):
        logger = _request_logger()
        s = DeckSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        deck = s.save()
        logger.info("deck_created", deck_id=str(deck.pk), name=deck.name)
        return Response(DeckSerializer(deck).data, status=status.HTTP_201_CREATED)


class CardCreateView(views.APIView):
    def post(self, request, deck_id):
        logger = _request_logger()
        deck = get_object_or_404(Deck, pk=deck_id)
        s = CardSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        card = s.save(deck=deck)
        logger.info("card_created", deck_id=str(deck.pk), card_id=str(card.pk))
        return Response(CardSerializer(card).data, status=status.HTTP_201_CREATED)


class ReviewView(views.APIView):
    def post(self, request):
        logger = _request_logger()

        s = ReviewInSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        card_id = s.validated_data["card_id"]
        quality = s.validated_data["quality"]
        idem = s.validated_data["idempotency_key"]

        result = record_review(card_id, quality, idem)
        status_code = status.HTTP_200_OK if result.idempotent else status.HTTP_201_CREATED

        # Log with request_id & relevant context
        logger.info(
            "review_api_response",
            card_id=str(card_id),
            quality=quality,
            idempotent=result.idempotent,
            interval_days=result.interval,
            next_review_utc=to_utc_iso(result.next_review),
            status=status_code,
        )

        return Response(
            {
                "card_id": str(result.card_id),
                "interval": result.interval,
                "ease_factor": result.ease_factor,
                "review_count": result.review_count,
                "last_reviewed_utc": to_utc_iso(result.last_reviewed),
                "next_review_utc": to_utc_iso(result.next_review),
                "next_review_local": to_local_iso(result.next_review),
                "quality_label": ANSWER_LABELS.get(result.quality),
                "remembered": is_remembered(result.quality),
                "idempotent": result.idempotent,
            },
            status=status_code,
        )


class StudyQueueView(views.APIView):
    def get(self, request, deck_id):
        logger = _request_logger()
        cards = study_queue(deck_id)
        logger.info("study_queue_api_response", deck_id=str(deck_id), card_count=len(cards))
        return Response(
            {
                "deck_id": str(deck_id),
                "cards": CardSerializer(cards, many=True).data,
            }
        )


class DueCardsView(views.APIView):
    def get(self, request, deck_id):
        logger = _request_logger()

        qs = DueQuerySerializer(data=request.query_params)
        qs.is_valid(raise_exception=True)
        until = qs.validated_data.get("until") or timezone.now()

        results = [str(card.pk) for card in due_queue(deck_id, until)]

        logger.info(
            "due_cards_api_response",
            deck_id=str(deck_id),
            until_utc=to_utc_iso(until),
            card_count=len(results),
        )

        return Response(
            {
                "deck_id": str(deck_id),
                "until_utc": to_utc_iso(until),
                "until_local": to_local_iso(until),
                "card_ids": results,
            }
        )


class StudySessionView(views.APIView):
    def post(self, request, deck_id):
        logger = _request_logger()

        s = SessionInSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        session = complete_session(
            deck_id,
            s.validated_data["qualities"],
            s.validated_data["started_at"],
        )
        logger.info("session_api_response", deck_id=str(deck_id), session_id=str(session.pk))
        return Response(StudySessionSerializer(session).data, status=status.HTTP_201_CREATED)


class StatisticsView(views.APIView):
    def get(self, request):
        logger = _request_logger()

        qs = StatisticsQuerySerializer(data=request.query_params)
        qs.is_valid(raise_exception=True)
        deck_id = qs.validated_data.get("deck_id")

        today = timezone.now().date()
        stats = summarize(session_records(deck_id), today)

        logger.info(
            "statistics_api_response",
            deck_id=str(deck_id) if deck_id else None,
            total_sessions=stats["total_sessions"],
            current_streak=stats["current_streak"],
        )
        return Response(stats)
