from __future__ import annotations

from rest_framework import serializers

from conference.menus.models import Menu
from conference.utils.serializers import InputAliasMixin


class MenuSerializer(InputAliasMixin, serializers.ModelSerializer):
    input_aliases = {"mealType": "meal_type"}

    items = serializers.ListField(
        child=serializers.CharField(max_length=255, trim_whitespace=True),
        allow_empty=False,
    )

    class Meta:
        model = Menu
        fields = [
            "id",
            "day",
            "meal_type",
            "items",
            "description",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]
        # (day, meal_type) is upserted by the view; clashes are checked below.
        validators: list = []

    def validate_items(self, value):
        items = [item for item in value if item]
        if not items:
            msg = "At least one item is required."
            raise serializers.ValidationError(msg)
        return items

    def validate(self, attrs):
        if self.instance is None:
            return attrs
        day = attrs.get("day", self.instance.day)
        meal_type = attrs.get("meal_type", self.instance.meal_type)
        clash = Menu.objects.filter(day=day, meal_type=meal_type).exclude(
            pk=self.instance.pk
        )
        if clash.exists():
            msg = "A menu already exists for this day and meal type."
            raise serializers.ValidationError(msg)
        return attrs
