from __future__ import annotations

import logging

from django.conf import settings
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler
from rest_framework.views import set_rollback

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    """DRF exception handler that turns unexpected errors into a JSON 500.

    Known API exceptions (401/403/404/400) keep DRF's default rendering.
    """

    response = exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get("view")
    logger.error(
        "Unhandled error in %s",
        type(view).__name__ if view is not None else "view",
        exc_info=exc,
    )
    set_rollback()
    body = {"detail": "Internal server error"}
    if settings.DEBUG:
        body["error"] = str(exc)
    return Response(body, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
