from django.contrib.auth.models import AbstractUser
from django.db import models
from django.db.models import CharField
from django.db.models import EmailField
from django.utils.translation import gettext_lazy as _


class Role(models.TextChoices):
    ADMIN = "admin", _("Admin")
    VOLUNTEER = "volunteer", _("Volunteer")
    ATTENDEE = "attendee", _("Attendee")


# Django auth group that mirrors each role.
ROLE_GROUPS = {
    Role.ADMIN: "Admin",
    Role.VOLUNTEER: "Volunteer",
    Role.ATTENDEE: "Attendee",
}


class User(AbstractUser):
    """
    Conference account.

    ``role`` decides what the account may change through the API; staff and
    superusers are always treated as admins.
    """

    # First and last name do not cover name patterns around the globe
    name = CharField(_("Full Name"), blank=True, max_length=255)
    email = EmailField(_("email address"), unique=True)
    role = CharField(
        _("Role"),
        max_length=20,
        choices=Role.choices,
        default=Role.ATTENDEE,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def save(self, *args, **kwargs):
        if self.email:
            self.email = self.email.strip().lower()
        if not self.name:
            self.name = f"{self.first_name} {self.last_name}".strip()
        super().save(*args, **kwargs)

    @property
    def effective_role(self) -> str:
        if self.is_superuser or self.is_staff:
            return Role.ADMIN
        return self.role
