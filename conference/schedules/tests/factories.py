from __future__ import annotations

from datetime import UTC
from datetime import datetime
from datetime import timedelta

from conference.halls.models import Hall
from conference.schedules.models import Session

# Fixed instant used by time-dependent tests.
CONFERENCE_DAY = datetime(2025, 3, 14, 9, 0, tzinfo=UTC)


def make_session(hall: Hall, start: datetime, minutes: int = 60, **extra) -> Session:
    extra.setdefault("title", f"Talk at {start:%H:%M}")
    extra.setdefault("authors", "A. Speaker")
    return Session.objects.create(
        hall=hall,
        start_time=start,
        end_time=start + timedelta(minutes=minutes),
        **extra,
    )
