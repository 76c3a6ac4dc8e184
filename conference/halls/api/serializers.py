from __future__ import annotations

from rest_framework import serializers

from conference.halls.models import Hall
from conference.schedules.api.serializers import HallSummarySerializer
from conference.schedules.api.serializers import SessionSerializer


class HallSerializer(serializers.ModelSerializer):
    class Meta:
        model = Hall
        fields = [
            "id",
            "name",
            "code",
            "capacity",
            "location",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_code(self, value: str) -> str:
        code = value.strip().upper()
        clash = Hall.objects.filter(code=code)
        if self.instance is not None:
            clash = clash.exclude(pk=self.instance.pk)
        if clash.exists():
            msg = "A hall with this code already exists."
            raise serializers.ValidationError(msg)
        return code


class HallStatusSerializer(serializers.Serializer):
    hall = HallSummarySerializer()
    current = SessionSerializer(allow_null=True)
    next = SessionSerializer(allow_null=True)
    time_remaining = serializers.IntegerField(allow_null=True)
