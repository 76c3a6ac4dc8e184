from django.conf import settings
from django.db import models
from django.db.models import Case
from django.db.models import IntegerField
from django.db.models import Value
from django.db.models import When
from django.utils.translation import gettext_lazy as _


class ComplaintCategory(models.TextChoices):
    TRANSPORT = "transport", _("Transport")
    GUESTHOUSE = "guesthouse", _("Guesthouse")
    CLEANING = "cleaning", _("Cleaning")
    PRESENTATION = "presentation", _("Presentation")
    OTHER = "other", _("Other")


class ComplaintPriority(models.TextChoices):
    LOW = "low", _("Low")
    MEDIUM = "medium", _("Medium")
    HIGH = "high", _("High")


class ComplaintStatus(models.TextChoices):
    PENDING = "pending", _("Pending")
    ASSIGNED = "assigned", _("Assigned")
    IN_PROGRESS = "in-progress", _("In progress")
    RESOLVED = "resolved", _("Resolved")
    CLOSED = "closed", _("Closed")


class ComplaintQuerySet(models.QuerySet):
    def by_urgency(self):
        """High priority first, newest first within a priority."""

        rank = Case(
            When(priority=ComplaintPriority.HIGH, then=Value(0)),
            When(priority=ComplaintPriority.MEDIUM, then=Value(1)),
            default=Value(2),
            output_field=IntegerField(),
        )
        return self.annotate(priority_rank=rank).order_by(
            "priority_rank",
            "-created_at",
            "-id",
        )


class Complaint(models.Model):
    category = models.CharField(max_length=20, choices=ComplaintCategory.choices)
    priority = models.CharField(
        max_length=10,
        choices=ComplaintPriority.choices,
        default=ComplaintPriority.MEDIUM,
    )
    title = models.CharField(max_length=255)
    description = models.TextField()
    contact_email = models.EmailField(blank=True)
    contact_phone = models.CharField(max_length=50, blank=True)
    attachments = models.JSONField(default=list, blank=True)
    status = models.CharField(
        max_length=20,
        choices=ComplaintStatus.choices,
        default=ComplaintStatus.PENDING,
    )
    assigned_to = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="assigned_complaints",
    )
    response = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ComplaintQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        return f"[{self.category}] {self.title}"

    def save(self, *args, **kwargs):
        self.contact_email = (self.contact_email or "").strip().lower()
        super().save(*args, **kwargs)
