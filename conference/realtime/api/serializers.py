from __future__ import annotations

from rest_framework import serializers

from conference.realtime.events import is_known_event


class RelayEmitSerializer(serializers.Serializer):
    event = serializers.CharField(max_length=64)
    data = serializers.JSONField(required=False, allow_null=True, default=None)

    def validate_event(self, value: str) -> str:
        if not is_known_event(value):
            msg = f"Unknown event: {value}"
            raise serializers.ValidationError(msg)
        return value
