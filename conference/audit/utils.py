from __future__ import annotations

import logging
from typing import Any

from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.db import transaction

from conference.utils.requests import client_ip
from conference.utils.requests import user_agent

from .models import AuditLog

logger = logging.getLogger(__name__)


SENSITIVE_KEYS = ("password", "token", "secret")
REDACTED = "[redacted]"


def _is_sensitive(key: object) -> bool:
    lowered = str(key).lower()
    return any(marker in lowered for marker in SENSITIVE_KEYS)


def _jsonable(value: Any) -> Any:
    """Reduce request payloads (QueryDict, uploads) to JSON-friendly data.

    Credentials are replaced with a marker so they never reach the log.
    """

    if hasattr(value, "lists") and callable(value.lists):
        out = {}
        for key, items in value.lists():
            if _is_sensitive(key):
                out[key] = REDACTED
                continue
            converted = [_jsonable(i) for i in items]
            out[key] = converted[0] if len(converted) == 1 else converted
        return out
    if isinstance(value, dict):
        return {
            str(k): REDACTED if _is_sensitive(k) else _jsonable(v)
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


def log_action(  # noqa: PLR0913
    action: str,
    *,
    actor: object | None = None,
    resource_type: str = "",
    resource_id: object | None = None,
    changes: Any = None,
    request=None,
) -> AuditLog | None:
    """Append an audit row; never raises.

    Audit is observability only, so a failing insert is logged and the caller
    carries on.
    """

    user_model = get_user_model()
    actor_user = actor if isinstance(actor, user_model) else None
    try:
        # Savepoint so a failed insert does not poison an atomic request.
        with transaction.atomic():
            return AuditLog.objects.create(
                action=action,
                actor=actor_user,
                resource_type=resource_type,
                resource_id="" if resource_id is None else str(resource_id),
                changes=_jsonable(changes),
                ip_address=client_ip(request) if request is not None else "",
                user_agent=user_agent(request) if request is not None else "",
            )
    except (DatabaseError, TypeError, ValueError):
        logger.exception(
            "Failed to write audit log %s %s %s",
            action,
            resource_type,
            resource_id,
        )
        return None
