from __future__ import annotations

from django.db.models import Q
from django.utils import timezone
from django_filters import rest_framework as filters
from rest_framework import viewsets
from rest_framework.permissions import AllowAny

from conference.audit.mixins import AuditedViewSetMixin
from conference.events.api.serializers import EventSerializer
from conference.events.models import Event
from conference.events.types import EventType
from conference.events.types import InvalidEventTypeError
from conference.realtime.events import ENTITY_EVENT
from conference.realtime.mixins import BroadcastViewSetMixin
from conference.users.api.permissions import IsAdmin


class EventFilter(filters.FilterSet):
    type = filters.CharFilter(method="filter_type")
    upcoming = filters.BooleanFilter(method="filter_upcoming")

    class Meta:
        model = Event
        fields = ["type", "upcoming", "rsvp_required"]

    def filter_type(self, queryset, name, value):
        try:
            event_type = EventType.parse(value)
        except InvalidEventTypeError:
            return queryset.none()
        if event_type.is_custom:
            return queryset.filter(
                Q(kind=event_type.kind) & Q(custom_type__iexact=event_type.label)
            )
        return queryset.filter(kind=event_type.kind)

    def filter_upcoming(self, queryset, name, value):
        if not value:
            return queryset
        return queryset.filter(start_time__gte=timezone.now())


class EventViewSet(AuditedViewSetMixin, BroadcastViewSetMixin, viewsets.ModelViewSet):
    queryset = Event.objects.order_by("start_time", "id")
    serializer_class = EventSerializer
    filterset_class = EventFilter
    permission_classes = [AllowAny]
    audit_resource = "event"
    broadcast_entity = ENTITY_EVENT

    def get_permissions(self):
        if self.request and self.request.method in {"POST", "PUT", "PATCH", "DELETE"}:
            return [IsAdmin()]
        return super().get_permissions()
