from __future__ import annotations

import logging
from typing import Any

from django.db import transaction

from conference.realtime.broadcasters import Broadcaster
from conference.realtime.broadcasters import get_default_broadcaster
from conference.realtime.events import ACTION_DELETE
from conference.realtime.events import ACTION_NEW
from conference.realtime.events import ACTION_UPDATE
from conference.realtime.events import delete_payload
from conference.realtime.events import event_name

logger = logging.getLogger(__name__)


class BroadcastViewSetMixin:
    """Publish ``<entity>:new|update|delete`` once a write has committed.

    ``broadcaster`` may be set on the class or passed to ``as_view()``;
    when left as None the settings-selected broadcaster is used.
    """

    broadcast_entity: str = ""
    broadcaster: Broadcaster | None = None

    def get_broadcaster(self) -> Broadcaster:
        if self.broadcaster is not None:
            return self.broadcaster
        return get_default_broadcaster()

    def broadcast(self, action: str, payload: Any) -> None:
        broadcaster = self.get_broadcaster()
        event = event_name(self.broadcast_entity, action)

        def send():
            if not broadcaster.emit(event, payload):
                logger.debug("Broadcast of %s was not delivered", event)

        transaction.on_commit(send, robust=True)

    def get_broadcast_payload(self, serializer) -> Any:
        return serializer.data

    def perform_create(self, serializer):
        super().perform_create(serializer)
        self.broadcast(ACTION_NEW, self.get_broadcast_payload(serializer))

    def perform_update(self, serializer):
        super().perform_update(serializer)
        self.broadcast(ACTION_UPDATE, self.get_broadcast_payload(serializer))

    def perform_destroy(self, instance):
        pk = instance.pk
        super().perform_destroy(instance)
        self.broadcast(ACTION_DELETE, delete_payload(pk))
