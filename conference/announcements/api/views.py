from __future__ import annotations

from django_filters import rest_framework as filters
from rest_framework import viewsets
from rest_framework.permissions import AllowAny

from conference.announcements.api.serializers import AnnouncementSerializer
from conference.announcements.models import Announcement
from conference.audit.mixins import AuditedViewSetMixin
from conference.realtime.events import ENTITY_ANNOUNCEMENT
from conference.realtime.mixins import BroadcastViewSetMixin
from conference.users.api.permissions import IsAdmin
from conference.users.api.permissions import IsAdminOrVolunteer

DEFAULT_LIMIT = 50


class AnnouncementFilter(filters.FilterSet):
    class Meta:
        model = Announcement
        fields = ["type", "priority"]


class AnnouncementViewSet(
    AuditedViewSetMixin,
    BroadcastViewSetMixin,
    viewsets.ModelViewSet,
):
    queryset = Announcement.objects.select_related("created_by")
    serializer_class = AnnouncementSerializer
    filterset_class = AnnouncementFilter
    permission_classes = [AllowAny]
    audit_resource = "announcement"
    broadcast_entity = ENTITY_ANNOUNCEMENT

    def get_permissions(self):
        if self.request and self.request.method == "DELETE":
            return [IsAdmin()]
        if self.request and self.request.method in {"POST", "PUT", "PATCH"}:
            return [IsAdminOrVolunteer()]
        return super().get_permissions()

    def filter_queryset(self, queryset):
        queryset = super().filter_queryset(queryset)
        if self.action != "list":
            return queryset
        try:
            limit = int(self.request.query_params.get("limit", DEFAULT_LIMIT))
        except (TypeError, ValueError):
            limit = DEFAULT_LIMIT
        return queryset[: max(1, limit)]
