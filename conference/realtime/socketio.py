"""Socket.IO server shared by every realtime feature.

Frontend convention:
- Socket.IO path: /api/socket/ (see ``config.asgi``)
- Auth: optional ``query.token`` or ``auth.token`` (JWT access token)

Viewers do not need an account: anonymous sockets receive every broadcast.
A valid token additionally places the socket in ``user_<id>`` and
``role_<role>`` rooms.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qs

import socketio
from asgiref.sync import async_to_sync
from channels.db import database_sync_to_async
from django.conf import settings
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import TokenError

from conference.users.api.permissions import user_role

logger = logging.getLogger(__name__)


def _cors_origins() -> str | list[str]:
    raw = getattr(settings, "SOCKET_CORS_ALLOWED_ORIGINS", "*") or "*"
    if raw == "*":
        return raw
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


sio = socketio.AsyncServer(
    async_mode="asgi",
    cors_allowed_origins=_cors_origins(),
    logger=False,
    engineio_logger=False,
)


@dataclass(frozen=True)
class ViewerContext:
    user_id: int
    role: str


def room_for_user(user_id: int) -> str:
    return f"user_{int(user_id)}"


def room_for_role(role: str) -> str:
    return f"role_{role.strip().lower()}"


@database_sync_to_async
def _get_viewer_from_access_token(token: str) -> ViewerContext:
    jwt_auth = JWTAuthentication()
    validated = jwt_auth.get_validated_token(token)
    user = jwt_auth.get_user(validated)
    return ViewerContext(user_id=int(user.id), role=user_role(user) or "")


def _extract_token(environ: dict[str, Any], auth: Any | None) -> str | None:
    """Extract JWT token from Socket.IO environ/auth.

    Handles python-socketio environ shapes across ASGI/WSGI servers.
    """

    scope: Any = environ
    if isinstance(environ, dict) and "asgi.scope" in environ:
        inner = environ.get("asgi.scope")
        if isinstance(inner, dict):
            scope = inner

    query_string: str | bytes = ""
    if isinstance(scope, dict) and "query_string" in scope:
        query_string = scope.get("query_string", b"")
    elif isinstance(scope, dict) and "QUERY_STRING" in scope:
        query_string = scope.get("QUERY_STRING", "")

    if isinstance(query_string, (bytes, bytearray)):
        query_string = query_string.decode(errors="ignore")

    token = parse_qs(str(query_string)).get("token", [None])[0]
    if isinstance(token, str) and token:
        return token

    if isinstance(auth, dict):
        auth_token = auth.get("token")
        if isinstance(auth_token, str) and auth_token:
            return auth_token

    return None


@sio.event
async def connect(sid: str, environ: dict[str, Any], auth: Any | None = None):
    token = _extract_token(environ, auth)
    if not token:
        await sio.save_session(sid, {"user_id": None, "role": None})
        return

    try:
        ctx = await _get_viewer_from_access_token(token)
    except (TokenError, AuthenticationFailed) as exc:
        # Stale kiosk tokens still get the public feed.
        logger.info("Socket %s connected anonymously: %s", sid, exc)
        await sio.save_session(sid, {"user_id": None, "role": None})
        return

    await sio.save_session(sid, {"user_id": ctx.user_id, "role": ctx.role})
    await sio.enter_room(sid, room_for_user(ctx.user_id))
    if ctx.role:
        await sio.enter_room(sid, room_for_role(ctx.role))


@sio.event
async def disconnect(sid: str, *args):
    logger.debug("Socket %s disconnected", sid)


def connected_client_count() -> int:
    """Number of sockets currently connected to this process."""

    rooms = getattr(sio.manager, "rooms", None) or {}
    return len(rooms.get("/", {}).get(None, {}))


def emit_event(event: str, payload: Any, room: str | None = None) -> None:
    """Emit an event from sync Django code; ``room=None`` reaches everyone."""

    async_to_sync(sio.emit)(event, payload, room=room)
