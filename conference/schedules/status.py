"""Time-derived session status.

These helpers are shared by the API serializers, the periodic status sweep,
the hall status resolver and the realtime client, so they take plain values
and work on model instances as well as on decoded JSON dicts. Nothing here
touches the database.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC
from datetime import datetime
from datetime import timedelta
from typing import Any

STATUS_UPCOMING = "upcoming"
STATUS_ONGOING = "ongoing"
STATUS_COMPLETED = "completed"
STATUS_CANCELLED = "cancelled"

_FIELD_ALIASES = {
    "start_time": ("start_time", "startTime"),
    "end_time": ("end_time", "endTime"),
    "status": ("status",),
    "id": ("id", "pk", "_id"),
}


def parse_instant(value: datetime | str) -> datetime:
    """Return an aware datetime; ISO strings ending in ``Z`` are accepted."""

    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def session_value(session: Any, field: str) -> Any:
    for name in _FIELD_ALIASES.get(field, (field,)):
        if isinstance(session, dict):
            if name in session:
                return session[name]
        elif hasattr(session, name):
            return getattr(session, name)
    return None


def session_bounds(session: Any) -> tuple[datetime, datetime]:
    return (
        parse_instant(session_value(session, "start_time")),
        parse_instant(session_value(session, "end_time")),
    )


def is_cancelled(session: Any) -> bool:
    return session_value(session, "status") == STATUS_CANCELLED


def derive_status(
    persisted_status: str,
    start: datetime | str,
    end: datetime | str,
    now: datetime,
) -> str:
    """Status as seen at ``now``. A cancelled session stays cancelled."""

    if persisted_status == STATUS_CANCELLED:
        return STATUS_CANCELLED
    start_at = parse_instant(start)
    end_at = parse_instant(end)
    if now < start_at:
        return STATUS_UPCOMING
    if now <= end_at:
        return STATUS_ONGOING
    return STATUS_COMPLETED


def status_of(session: Any, now: datetime) -> str:
    start, end = session_bounds(session)
    return derive_status(session_value(session, "status"), start, end, now)


def _order_key(session: Any) -> tuple[datetime, int, int, str]:
    start = session_bounds(session)[0]
    ident = session_value(session, "id")
    if isinstance(ident, int):
        return (start, 0, ident, "")
    return (start, 1, 0, str(ident or ""))


def _ordered(sessions: Iterable[Any]) -> list[Any]:
    return sorted((s for s in sessions if not is_cancelled(s)), key=_order_key)


def select_current(sessions: Iterable[Any], now: datetime) -> Any | None:
    """First session (by start) with ``start <= now < end``.

    Overlapping sessions in one hall are not rejected on write; when several
    match, the earliest-starting one is returned.
    """

    for session in _ordered(sessions):
        start, end = session_bounds(session)
        if start <= now < end:
            return session
    return None


def select_next(sessions: Iterable[Any], now: datetime) -> Any | None:
    for session in _ordered(sessions):
        if session_bounds(session)[0] > now:
            return session
    return None


def minutes_remaining(session: Any, now: datetime) -> int:
    """Whole minutes until ``session`` ends, never negative."""

    _, end = session_bounds(session)
    return max(0, (end - now) // timedelta(minutes=1))


def next_transition(sessions: Iterable[Any], now: datetime) -> datetime | None:
    """Earliest future instant at which any session changes status."""

    candidates: list[datetime] = []
    for session in sessions:
        if is_cancelled(session):
            continue
        start, end = session_bounds(session)
        if now < start:
            candidates.append(start)
        elif now < end:
            candidates.append(end)
    return min(candidates) if candidates else None
