from django.db import models
from django.utils.translation import gettext_lazy as _

from conference.halls.models import Hall
from conference.schedules import status as session_status


class SessionStatus(models.TextChoices):
    UPCOMING = session_status.STATUS_UPCOMING, _("Upcoming")
    ONGOING = session_status.STATUS_ONGOING, _("Ongoing")
    COMPLETED = session_status.STATUS_COMPLETED, _("Completed")
    CANCELLED = session_status.STATUS_CANCELLED, _("Cancelled")


class Session(models.Model):
    """A talk, keynote or plenary slot in one hall."""

    title = models.CharField(max_length=255)
    authors = models.CharField(max_length=500)
    hall = models.ForeignKey(Hall, on_delete=models.CASCADE, related_name="sessions")
    start_time = models.DateTimeField()
    end_time = models.DateTimeField()
    status = models.CharField(
        max_length=20,
        choices=SessionStatus.choices,
        default=SessionStatus.UPCOMING,
    )
    tags = models.JSONField(default=list, blank=True)
    slide_link = models.URLField(max_length=500, blank=True)
    description = models.TextField(blank=True)
    is_plenary = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["start_time", "id"]
        indexes = [
            models.Index(fields=["start_time", "hall"], name="session_start_hall_idx"),
            models.Index(fields=["status"], name="session_status_idx"),
        ]

    def __str__(self) -> str:
        return self.title

    def computed_status(self, now) -> str:
        return session_status.derive_status(
            self.status,
            self.start_time,
            self.end_time,
            now,
        )

    def overlapping(self):
        """Other live sessions in the same hall whose time range intersects."""

        return (
            Session.objects.filter(
                hall_id=self.hall_id,
                start_time__lt=self.end_time,
                end_time__gt=self.start_time,
            )
            .exclude(pk=self.pk)
            .exclude(status=SessionStatus.CANCELLED)
        )
