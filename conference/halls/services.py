"""Live status of every hall: what is on now, what is next, minutes left."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from django.utils import timezone

from conference.halls.models import Hall
from conference.schedules.models import Session
from conference.schedules.models import SessionStatus
from conference.schedules.status import minutes_remaining


@dataclass(frozen=True)
class HallStatus:
    hall: Hall
    current: Session | None
    next: Session | None
    time_remaining: int | None


def hall_status(hall: Hall, now: datetime) -> HallStatus:
    sessions = (
        Session.objects.select_related("hall")
        .filter(hall=hall)
        .exclude(status=SessionStatus.CANCELLED)
        .order_by("start_time", "id")
    )
    # Overlaps are allowed on write; the earliest-starting match wins here.
    current = sessions.filter(start_time__lte=now, end_time__gt=now).first()
    upcoming = sessions.filter(start_time__gt=now).first()
    return HallStatus(
        hall=hall,
        current=current,
        next=upcoming,
        time_remaining=minutes_remaining(current, now) if current else None,
    )


def resolve_hall_statuses(now: datetime | None = None) -> list[HallStatus]:
    """One :class:`HallStatus` per hall, ordered by hall code.

    Any database error propagates: callers get all halls or none.
    """

    now = now or timezone.now()
    return [hall_status(hall, now) for hall in Hall.objects.order_by("code", "id")]
