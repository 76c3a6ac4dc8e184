"""Event names pushed to realtime clients.

Every entity emits ``<entity>:new``, ``<entity>:update`` and
``<entity>:delete``. Delete payloads only carry ``{"id": ...}``.
"""

from __future__ import annotations

import json
from typing import Any

from django.core.serializers.json import DjangoJSONEncoder

ENTITY_SCHEDULE = "schedule"
ENTITY_ANNOUNCEMENT = "announcement"
ENTITY_EVENT = "event"
ENTITY_MENU = "menu"
ENTITY_COMPLAINT = "complaint"

ENTITIES = (
    ENTITY_SCHEDULE,
    ENTITY_ANNOUNCEMENT,
    ENTITY_EVENT,
    ENTITY_MENU,
    ENTITY_COMPLAINT,
)

ACTION_NEW = "new"
ACTION_UPDATE = "update"
ACTION_DELETE = "delete"

ACTIONS = (ACTION_NEW, ACTION_UPDATE, ACTION_DELETE)


def event_name(entity: str, action: str) -> str:
    return f"{entity}:{action}"


KNOWN_EVENTS = frozenset(event_name(e, a) for e in ENTITIES for a in ACTIONS)


def is_known_event(name: str) -> bool:
    return name in KNOWN_EVENTS


def delete_payload(pk: Any) -> dict[str, Any]:
    return {"id": pk}


def to_wire(payload: Any) -> Any:
    """Plain JSON types only (serializer output may hold ReturnDict, UUID...)."""

    return json.loads(json.dumps(payload, cls=DjangoJSONEncoder))
