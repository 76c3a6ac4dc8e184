from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class MenusConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "conference.menus"
    verbose_name = _("Menus")
