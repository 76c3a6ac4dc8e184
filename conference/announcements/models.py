from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


class AnnouncementType(models.TextChoices):
    ANNOUNCEMENT = "announcement", _("Announcement")
    ALERT = "alert", _("Alert")
    TRANSPORT = "transport", _("Transport")
    DINNER = "dinner", _("Dinner")
    CULTURAL = "cultural", _("Cultural")


class AnnouncementPriority(models.TextChoices):
    NORMAL = "normal", _("Normal")
    HIGH = "high", _("High")
    URGENT = "urgent", _("Urgent")


class Announcement(models.Model):
    title = models.CharField(max_length=255)
    type = models.CharField(max_length=20, choices=AnnouncementType.choices)
    priority = models.CharField(
        max_length=10,
        choices=AnnouncementPriority.choices,
        default=AnnouncementPriority.NORMAL,
    )
    content = models.TextField()
    link = models.URLField(max_length=500, blank=True)
    # Path or URL of an attachment hosted elsewhere.
    file = models.CharField(max_length=500, blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name="announcements",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        return self.title
