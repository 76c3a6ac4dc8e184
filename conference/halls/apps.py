from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class HallsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "conference.halls"
    verbose_name = _("Halls")
