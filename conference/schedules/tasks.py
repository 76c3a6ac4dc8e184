import logging

from celery import shared_task
from django.utils import timezone

from conference.realtime.broadcasters import get_default_broadcaster
from conference.realtime.events import ACTION_UPDATE
from conference.realtime.events import ENTITY_SCHEDULE
from conference.schedules.api.serializers import SessionSerializer
from conference.schedules.models import Session
from conference.schedules.models import SessionStatus

logger = logging.getLogger(__name__)


@shared_task(name="schedules.sync_statuses")
def sync_statuses(now_iso: str | None = None) -> int:
    """Persist the time-derived status of every session that drifted.

    Cancelled sessions are never touched. Each changed session is pushed as
    ``schedule:update`` so connected clients converge too.

    Args:
        now_iso: ISO timestamp to evaluate at. Defaults to the current time.

    Returns:
        Number of sessions updated.
    """
    now = timezone.datetime.fromisoformat(now_iso) if now_iso else timezone.now()
    if timezone.is_naive(now):
        now = timezone.make_aware(now)

    qs = (
        Session.objects.select_related("hall")
        .exclude(status=SessionStatus.CANCELLED)
        .exclude(status=SessionStatus.COMPLETED, end_time__lt=now)
    )
    changed: list[Session] = []
    for session in qs.iterator():
        derived = session.computed_status(now)
        if session.status != derived:
            session.status = derived
            session.save(update_fields=["status", "updated_at"])
            changed.append(session)

    if changed:
        # Workers hold no sockets; go through the relay when one is set.
        broadcaster = get_default_broadcaster(in_process=False)
        for session in changed:
            payload = SessionSerializer(session, context={"now": now}).data
            broadcaster.publish(ENTITY_SCHEDULE, ACTION_UPDATE, payload)
        logger.info("Synced status of %d session(s)", len(changed))
    return len(changed)
