from __future__ import annotations

import logging
import secrets

from django.conf import settings
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from conference.realtime.api.serializers import RelayEmitSerializer
from conference.realtime.broadcasters import RELAY_TOKEN_HEADER
from conference.realtime.broadcasters import LocalBroadcaster
from conference.realtime.socketio import connected_client_count

logger = logging.getLogger(__name__)


class RelayEmitView(APIView):
    """Intake for :class:`RelayBroadcaster`: re-emit an event to local sockets."""

    authentication_classes: list = []
    permission_classes = [AllowAny]
    broadcaster = LocalBroadcaster()

    def _token_ok(self, request) -> bool:
        expected = getattr(settings, "SOCKET_RELAY_TOKEN", "")
        if not expected:
            return True
        supplied = request.headers.get(RELAY_TOKEN_HEADER, "")
        return secrets.compare_digest(supplied.encode(), expected.encode())

    @extend_schema(tags=["Realtime"], request=RelayEmitSerializer)
    def post(self, request):
        if not self._token_ok(request):
            return Response(
                {"detail": "Invalid relay token"},
                status=status.HTTP_403_FORBIDDEN,
            )
        payload = request.data if isinstance(request.data, dict) else {}
        if not payload.get("event"):
            return Response(
                {"error": "Event name is required"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        serializer = RelayEmitSerializer(data=payload)
        serializer.is_valid(raise_exception=True)
        event = serializer.validated_data["event"]
        delivered = self.broadcaster.emit(event, serializer.validated_data["data"])
        clients = connected_client_count()
        logger.info("Relayed %s to %s client(s)", event, clients)
        return Response({"success": delivered, "event": event, "clients": clients})
