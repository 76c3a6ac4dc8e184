from __future__ import annotations

from django.utils import timezone
from rest_framework import serializers

from conference.halls.models import Hall
from conference.schedules.models import Session
from conference.schedules.status import derive_status
from conference.utils.booleans import CoercedBooleanField
from conference.utils.serializers import InputAliasMixin


class HallSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Hall
        fields = ["id", "name", "code", "location"]


class SessionSerializer(InputAliasMixin, serializers.ModelSerializer):
    """Session with its hall embedded on read; ``hall`` is an id on write."""

    input_aliases = {
        "startTime": "start_time",
        "endTime": "end_time",
        "isPlenary": "is_plenary",
        "slideLink": "slide_link",
    }

    hall = serializers.PrimaryKeyRelatedField(queryset=Hall.objects.all())
    tags = serializers.ListField(
        child=serializers.CharField(max_length=64, trim_whitespace=True),
        required=False,
        default=list,
    )
    is_plenary = CoercedBooleanField(required=False, default=False)
    computed_status = serializers.SerializerMethodField()

    class Meta:
        model = Session
        fields = [
            "id",
            "title",
            "authors",
            "hall",
            "start_time",
            "end_time",
            "status",
            "computed_status",
            "tags",
            "slide_link",
            "description",
            "is_plenary",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def get_computed_status(self, obj: Session) -> str:
        now = self.context.get("now") or timezone.now()
        return derive_status(obj.status, obj.start_time, obj.end_time, now)

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data["hall"] = HallSummarySerializer(instance.hall).data
        return data

    def validate_tags(self, value):
        return [tag for tag in value if tag]

    def validate(self, attrs):
        start = attrs.get("start_time", getattr(self.instance, "start_time", None))
        end = attrs.get("end_time", getattr(self.instance, "end_time", None))
        if start and end and start >= end:
            raise serializers.ValidationError(
                {"end_time": "End time must be after start time."}
            )
        return attrs
