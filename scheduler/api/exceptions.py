from django.core.exceptions import ObjectDoesNotExist
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler
import structlog

from ..domain.errors import InvalidQualityError

logger = structlog.get_logger()


def exception_handler(exc, context):
    """DRF handler that also maps scheduler errors onto HTTP responses."""
    if isinstance(exc, InvalidQualityError):
        logger.warning("invalid_quality", quality=repr(exc.quality))
        return Response(
            {"error": str(exc), "code": "invalid_quality"},
            status=status.HTTP_400_BAD_REQUEST,
        )
    if isinstance(exc, ObjectDoesNotExist):
        logger.info("not_found", error=str(exc))
        return Response({"error": str(exc), "code": "not_found"}, status=status.HTTP_404_NOT_FOUND)
    return drf_exception_handler(exc, context)
