"""Publishers for realtime events.

Three implementations share one ``emit(event, payload) -> bool`` contract:

- :class:`LocalBroadcaster` pushes through the Socket.IO server running in
  this process (ASGI deployment).
- :class:`RelayBroadcaster` POSTs ``{event, data}`` to a separate process that
  hosts the sockets (``SOCKET_RELAY_URL``); used by workers and by
  deployments that cannot keep websockets open.
- :class:`NullBroadcaster` drops events when nothing is configured.

``emit`` never raises. A lost event only means clients refresh late.
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from typing import Any

from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder
from django.utils.module_loading import import_string

from conference.realtime.events import event_name
from conference.realtime.events import to_wire

logger = logging.getLogger(__name__)

RELAY_EMIT_PATH = "/api/emit/"
RELAY_TOKEN_HEADER = "X-Relay-Token"


class Broadcaster:
    """Interface for realtime publishers."""

    def emit(self, event: str, payload: Any) -> bool:
        raise NotImplementedError

    def publish(self, entity: str, action: str, payload: Any) -> bool:
        return self.emit(event_name(entity, action), payload)


class NullBroadcaster(Broadcaster):
    def emit(self, event: str, payload: Any) -> bool:
        logger.debug("No socket server configured; skipping %s", event)
        return False


class LocalBroadcaster(Broadcaster):
    def emit(self, event: str, payload: Any) -> bool:
        from conference.realtime.socketio import emit_event  # noqa: PLC0415

        try:
            emit_event(event, to_wire(payload))
        except Exception:
            logger.exception("Socket.IO emit failed for %s", event)
            return False
        return True


class RelayBroadcaster(Broadcaster):
    def __init__(
        self,
        base_url: str | None = None,
        *,
        token: str | None = None,
        timeout: float | None = None,
    ):
        self.base_url = (base_url or settings.SOCKET_RELAY_URL or "").rstrip("/")
        self.token = token if token is not None else settings.SOCKET_RELAY_TOKEN
        self.timeout = (
            timeout if timeout is not None else float(settings.SOCKET_RELAY_TIMEOUT)
        )

    @property
    def url(self) -> str:
        return f"{self.base_url}{RELAY_EMIT_PATH}"

    def emit(self, event: str, payload: Any) -> bool:
        if not self.base_url:
            logger.debug("SOCKET_RELAY_URL not set; skipping %s", event)
            return False

        body = json.dumps({"event": event, "data": payload}, cls=DjangoJSONEncoder)
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers[RELAY_TOKEN_HEADER] = self.token
        req = urllib.request.Request(  # noqa: S310 - relay URL by config
            self.url,
            data=body.encode("utf-8"),
            headers=headers,
            method="POST",
        )
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:  # noqa: S310 - relay URL by config
                resp.read()
        except urllib.error.HTTPError as e:
            logger.warning(
                "Socket relay rejected %s: %s %s",
                event,
                e.code,
                e.read().decode("utf-8", "ignore"),
            )
            return False
        except Exception as e:  # noqa: BLE001 - network/timeout must not break writes
            logger.warning("Socket relay unreachable for %s: %s", event, e)
            return False
        logger.debug("Relayed %s to %s", event, self.base_url)
        return True


def get_default_broadcaster(*, in_process: bool | None = None) -> Broadcaster:
    """Build the broadcaster selected by settings.

    ``REALTIME_BROADCASTER`` (dotted path) wins. Otherwise the in-process
    server is used when ``SOCKET_SERVER_IN_PROCESS`` is on (pass
    ``in_process=False`` from worker processes that hold no sockets), then the
    relay when ``SOCKET_RELAY_URL`` is set.
    """

    dotted = getattr(settings, "REALTIME_BROADCASTER", "")
    if dotted:
        return import_string(dotted)()

    if in_process is None:
        in_process = bool(getattr(settings, "SOCKET_SERVER_IN_PROCESS", False))
    if in_process:
        return LocalBroadcaster()
    if getattr(settings, "SOCKET_RELAY_URL", ""):
        return RelayBroadcaster()
    return NullBroadcaster()
