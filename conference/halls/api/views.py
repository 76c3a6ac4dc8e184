from __future__ import annotations

import logging

from django.db import DatabaseError
from django.utils import timezone
from drf_spectacular.utils import OpenApiParameter
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import set_rollback

from conference.audit.mixins import AuditedViewSetMixin
from conference.halls.api.serializers import HallSerializer
from conference.halls.api.serializers import HallStatusSerializer
from conference.halls.models import Hall
from conference.halls.services import resolve_hall_statuses
from conference.users.api.permissions import IsAdmin

logger = logging.getLogger(__name__)

NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, proxy-revalidate, max-age=0",
    "Pragma": "no-cache",
    "Expires": "0",
}


def _no_cache(response: Response) -> Response:
    for header, value in NO_CACHE_HEADERS.items():
        response[header] = value
    return response


class HallViewSet(AuditedViewSetMixin, viewsets.ModelViewSet):
    queryset = Hall.objects.order_by("code", "id")
    serializer_class = HallSerializer
    permission_classes = [AllowAny]
    audit_resource = "hall"

    def get_permissions(self):
        if self.request and self.request.method in {"POST", "PUT", "PATCH", "DELETE"}:
            return [IsAdmin()]
        return super().get_permissions()

    @extend_schema(
        parameters=[
            OpenApiParameter(
                "status",
                bool,
                description="When true, return live hall status instead",
            )
        ],
    )
    def list(self, request, *args, **kwargs):
        if request.query_params.get("status") == "true":
            return self.live_status(request)
        return super().list(request, *args, **kwargs)

    @extend_schema(responses=HallStatusSerializer(many=True))
    @action(detail=False, methods=["get"], url_path="status")
    def live_status(self, request):
        now = timezone.now()
        try:
            statuses = resolve_hall_statuses(now)
            data = HallStatusSerializer(
                statuses,
                many=True,
                context={"request": request, "now": now},
            ).data
        except DatabaseError:
            logger.exception("Failed to resolve hall status")
            set_rollback()
            return _no_cache(
                Response(
                    {"error": "Failed to fetch hall status"},
                    status=status.HTTP_500_INTERNAL_SERVER_ERROR,
                )
            )
        return _no_cache(Response(data))
