from __future__ import annotations

from django.contrib.auth import get_user_model
from django.contrib.auth.signals import user_logged_in
from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import mixins
from rest_framework import status
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.views import TokenObtainPairView
from rest_framework_simplejwt.views import TokenRefreshView
from rest_framework_simplejwt.views import TokenVerifyView

from conference.audit.mixins import AuditedViewSetMixin
from conference.users.api.permissions import IsAdmin
from conference.users.api.serializers import RoleTokenObtainPairSerializer
from conference.users.api.serializers import UserSerializer

User = get_user_model()


class UserViewSet(
    AuditedViewSetMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """Account administration; every signed-in user can read ``me``."""

    serializer_class = UserSerializer
    queryset = User.objects.order_by("-date_joined", "-id")
    permission_classes = [IsAdmin]
    audit_resource = "user"

    def get_permissions(self):
        if self.action == "me":
            return [IsAuthenticated()]
        return super().get_permissions()

    @action(detail=False)
    def me(self, request):
        serializer = UserSerializer(request.user, context={"request": request})
        return Response(status=status.HTTP_200_OK, data=serializer.data)

    def perform_destroy(self, instance):
        if instance.pk == self.request.user.pk:
            msg = "You cannot delete your own account."
            raise ValidationError({"detail": msg})
        super().perform_destroy(instance)


@extend_schema_view(post=extend_schema(tags=["Authentication"]))
class RoleTokenObtainPairView(TokenObtainPairView):
    """Obtain a JWT pair whose access token carries the user's role."""

    serializer_class = RoleTokenObtainPairSerializer

    def post(self, request, *args, **kwargs):
        response = super().post(request, *args, **kwargs)
        if response.status_code == status.HTTP_200_OK:
            user = User.objects.filter(pk=response.data["user"]["id"]).first()
            if user is not None:
                user_logged_in.send(sender=user.__class__, request=request, user=user)
        return response


@extend_schema_view(post=extend_schema(tags=["Authentication"]))
class JWTRefreshView(TokenRefreshView):
    pass


@extend_schema_view(post=extend_schema(tags=["Authentication"]))
class JWTVerifyView(TokenVerifyView):
    pass
