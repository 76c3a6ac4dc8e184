from __future__ import annotations

from rest_framework import serializers

from conference.announcements.models import Announcement
from conference.users.api.serializers import UserSummarySerializer


class AnnouncementSerializer(serializers.ModelSerializer):
    created_by = UserSummarySerializer(read_only=True)

    class Meta:
        model = Announcement
        fields = [
            "id",
            "title",
            "type",
            "priority",
            "content",
            "link",
            "file",
            "created_by",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_by", "created_at", "updated_at"]

    def create(self, validated_data):
        request = self.context.get("request")
        validated_data["created_by"] = getattr(request, "user", None)
        return super().create(validated_data)
