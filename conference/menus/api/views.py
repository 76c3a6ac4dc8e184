from __future__ import annotations

from django_filters import rest_framework as filters
from rest_framework import status
from rest_framework import viewsets
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from conference.audit.mixins import AuditedViewSetMixin
from conference.menus.api.serializers import MenuSerializer
from conference.menus.models import Menu
from conference.realtime.events import ENTITY_MENU
from conference.realtime.mixins import BroadcastViewSetMixin
from conference.users.api.permissions import IsAdmin
from conference.users.api.permissions import IsAdminOrVolunteer


class MenuFilter(filters.FilterSet):
    class Meta:
        model = Menu
        fields = ["day", "meal_type"]


class MenuViewSet(AuditedViewSetMixin, BroadcastViewSetMixin, viewsets.ModelViewSet):
    queryset = Menu.objects.order_by("day", "meal_type")
    serializer_class = MenuSerializer
    filterset_class = MenuFilter
    permission_classes = [AllowAny]
    audit_resource = "menu"
    broadcast_entity = ENTITY_MENU

    def get_permissions(self):
        if self.request and self.request.method == "DELETE":
            return [IsAdmin()]
        if self.request and self.request.method in {"POST", "PUT", "PATCH"}:
            return [IsAdminOrVolunteer()]
        return super().get_permissions()

    def create(self, request, *args, **kwargs):
        """Create the menu for (day, meal_type), or replace the existing one."""

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        existing = Menu.objects.filter(
            day=serializer.validated_data["day"],
            meal_type=serializer.validated_data["meal_type"],
        ).first()
        if existing is None:
            self.perform_create(serializer)
            return Response(serializer.data, status=status.HTTP_201_CREATED)

        serializer = self.get_serializer(existing, data=request.data)
        serializer.is_valid(raise_exception=True)
        self.perform_update(serializer)
        return Response(serializer.data, status=status.HTTP_200_OK)
