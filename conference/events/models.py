from django.db import models
from django.utils.translation import gettext_lazy as _

from conference.events.types import KIND_CULTURAL
from conference.events.types import KIND_CUSTOM
from conference.events.types import KIND_DINNER
from conference.events.types import MAX_LABEL_LENGTH
from conference.events.types import EventType


class EventKind(models.TextChoices):
    DINNER = KIND_DINNER, _("Dinner")
    CULTURAL = KIND_CULTURAL, _("Cultural")
    CUSTOM = KIND_CUSTOM, _("Custom")


class Event(models.Model):
    """Social programme item (dinner, cultural evening, excursion...)."""

    title = models.CharField(max_length=255)
    kind = models.CharField(max_length=20, choices=EventKind.choices)
    custom_type = models.CharField(max_length=MAX_LABEL_LENGTH, blank=True)
    description = models.TextField()
    venue = models.CharField(max_length=255)
    start_time = models.DateTimeField()
    end_time = models.DateTimeField()
    rsvp_required = models.BooleanField(default=False)
    ticket_info = models.CharField(max_length=500, blank=True)
    image_url = models.URLField(max_length=500, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["start_time", "id"]

    def __str__(self) -> str:
        return f"{self.title} ({self.event_type})"

    @property
    def event_type(self) -> EventType:
        return EventType(kind=self.kind, label=self.custom_type)

    @event_type.setter
    def event_type(self, value) -> None:
        parsed = EventType.parse(value)
        self.kind = parsed.kind
        self.custom_type = parsed.label
