from __future__ import annotations

from django.contrib.auth import get_user_model
from rest_framework import serializers

from conference.complaints.models import Complaint
from conference.users.api.serializers import UserSummarySerializer
from conference.utils.serializers import InputAliasMixin

User = get_user_model()


class ComplaintSerializer(InputAliasMixin, serializers.ModelSerializer):
    input_aliases = {
        "contactEmail": "contact_email",
        "contactPhone": "contact_phone",
        "assignedTo": "assigned_to",
    }

    assigned_to = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.all(),
        allow_null=True,
        required=False,
    )
    attachments = serializers.ListField(
        child=serializers.CharField(max_length=500),
        required=False,
        default=list,
    )

    class Meta:
        model = Complaint
        fields = [
            "id",
            "category",
            "priority",
            "title",
            "description",
            "contact_email",
            "contact_phone",
            "attachments",
            "status",
            "assigned_to",
            "response",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_contact_email(self, value: str) -> str:
        return value.strip().lower()

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data["assigned_to"] = (
            UserSummarySerializer(instance.assigned_to).data
            if instance.assigned_to_id
            else None
        )
        return data


class ComplaintSubmissionSerializer(ComplaintSerializer):
    """What anyone may send when filing a complaint."""

    assigned_to = serializers.PrimaryKeyRelatedField(read_only=True)

    class Meta(ComplaintSerializer.Meta):
        read_only_fields = [
            "id",
            "status",
            "assigned_to",
            "response",
            "created_at",
            "updated_at",
        ]


class PublicComplaintSerializer(serializers.ModelSerializer):
    class Meta:
        model = Complaint
        fields = ["id", "category", "priority", "status", "created_at"]
