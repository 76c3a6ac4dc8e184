from __future__ import annotations

from django_filters import rest_framework as filters
from drf_spectacular.utils import extend_schema
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from conference.audit.mixins import AuditedViewSetMixin
from conference.complaints.api.serializers import ComplaintSerializer
from conference.complaints.api.serializers import ComplaintSubmissionSerializer
from conference.complaints.api.serializers import PublicComplaintSerializer
from conference.complaints.models import Complaint
from conference.realtime.events import ENTITY_COMPLAINT
from conference.realtime.mixins import BroadcastViewSetMixin
from conference.users.api.permissions import IsAdmin
from conference.users.api.permissions import IsAdminOrVolunteer

PUBLIC_FEED_SIZE = 50


class ComplaintFilter(filters.FilterSet):
    class Meta:
        model = Complaint
        fields = ["status", "category", "priority", "assigned_to"]


class ComplaintViewSet(
    AuditedViewSetMixin,
    BroadcastViewSetMixin,
    viewsets.ModelViewSet,
):
    """Anyone may file; staff triage.

    Realtime pushes carry only the public projection so contact details
    never reach anonymous sockets.
    """

    queryset = Complaint.objects.select_related("assigned_to")
    serializer_class = ComplaintSerializer
    filterset_class = ComplaintFilter
    permission_classes = [IsAuthenticated]
    audit_resource = "complaint"
    broadcast_entity = ENTITY_COMPLAINT

    def get_queryset(self):
        return super().get_queryset().by_urgency()

    def get_serializer_class(self):
        if self.action == "create":
            return ComplaintSubmissionSerializer
        if self.action == "public":
            return PublicComplaintSerializer
        return super().get_serializer_class()

    def get_permissions(self):
        if self.action in {"create", "public"}:
            return [AllowAny()]
        if self.action == "destroy":
            return [IsAdmin()]
        if self.action in {"update", "partial_update"}:
            return [IsAdminOrVolunteer()]
        return super().get_permissions()

    def get_broadcast_payload(self, serializer):
        return PublicComplaintSerializer(serializer.instance).data

    @extend_schema(responses=PublicComplaintSerializer(many=True))
    @action(detail=False, methods=["get"], url_path="public", filter_backends=[])
    def public(self, request):
        rows = Complaint.objects.order_by("-created_at", "-id")[:PUBLIC_FEED_SIZE]
        return Response(PublicComplaintSerializer(rows, many=True).data)
