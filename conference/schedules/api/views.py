from __future__ import annotations

import logging

from rest_framework import viewsets
from rest_framework.permissions import AllowAny

from conference.audit.mixins import AuditedViewSetMixin
from conference.realtime.events import ENTITY_SCHEDULE
from conference.realtime.mixins import BroadcastViewSetMixin
from conference.schedules.api.filters import SessionFilter
from conference.schedules.api.serializers import SessionSerializer
from conference.schedules.models import Session
from conference.users.api.permissions import IsAdmin

logger = logging.getLogger(__name__)


class SessionViewSet(AuditedViewSetMixin, BroadcastViewSetMixin, viewsets.ModelViewSet):
    queryset = Session.objects.select_related("hall").order_by("start_time", "id")
    serializer_class = SessionSerializer
    filterset_class = SessionFilter
    permission_classes = [AllowAny]
    audit_resource = "schedule"
    broadcast_entity = ENTITY_SCHEDULE

    def get_permissions(self):
        if self.request and self.request.method in {"POST", "PUT", "PATCH", "DELETE"}:
            return [IsAdmin()]
        return super().get_permissions()

    def _warn_on_overlap(self, session: Session) -> None:
        clashes = list(session.overlapping().values_list("id", flat=True))
        if clashes:
            logger.warning(
                "Session %s overlaps session(s) %s in hall %s",
                session.pk,
                clashes,
                session.hall_id,
            )

    def perform_create(self, serializer):
        super().perform_create(serializer)
        self._warn_on_overlap(serializer.instance)

    def perform_update(self, serializer):
        super().perform_update(serializer)
        self._warn_on_overlap(serializer.instance)
