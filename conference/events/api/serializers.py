from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema_field
from rest_framework import serializers

from conference.events.models import Event
from conference.events.types import EventType
from conference.events.types import InvalidEventTypeError
from conference.utils.booleans import CoercedBooleanField
from conference.utils.serializers import InputAliasMixin


@extend_schema_field(OpenApiTypes.STR)
class EventTypeField(serializers.Field):
    """``"dinner"``, ``"cultural"`` or a custom label."""

    def to_representation(self, value: EventType) -> str:
        return value.value

    def to_internal_value(self, data) -> EventType:
        try:
            return EventType.parse(data)
        except InvalidEventTypeError as exc:
            raise serializers.ValidationError(str(exc)) from exc


class EventSerializer(InputAliasMixin, serializers.ModelSerializer):
    input_aliases = {
        "startTime": "start_time",
        "endTime": "end_time",
        "rsvpRequired": "rsvp_required",
        "ticketInfo": "ticket_info",
        "imageUrl": "image_url",
    }

    type = EventTypeField(source="event_type")
    type_kind = serializers.CharField(source="kind", read_only=True)
    rsvp_required = CoercedBooleanField(required=False, default=False)

    class Meta:
        model = Event
        fields = [
            "id",
            "title",
            "type",
            "type_kind",
            "description",
            "venue",
            "start_time",
            "end_time",
            "rsvp_required",
            "ticket_info",
            "image_url",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate(self, attrs):
        start = attrs.get("start_time", getattr(self.instance, "start_time", None))
        end = attrs.get("end_time", getattr(self.instance, "end_time", None))
        if start and end and start >= end:
            raise serializers.ValidationError(
                {"end_time": "End time must be after start time."}
            )
        return attrs
