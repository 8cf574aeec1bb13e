from .data.models import Card, Deck, ReviewLog, StudySession  # noqa: F401
