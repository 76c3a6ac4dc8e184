"""Celery app for the conference backend.

Workers and beat run the periodic session status sweep
(``schedules.sync_statuses``, scheduled in ``CELERY_BEAT_SCHEDULE``). They
hold no sockets, so anything they publish goes through the socket relay.
"""

import os

from celery import Celery
from celery.signals import setup_logging

# Tests and local runs set DJANGO_SETTINGS_MODULE themselves (pytest passes
# --ds=config.settings.test), so this only applies to deployed workers.
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.production")

app = Celery("conference")

# Every CELERY_* Django setting configures the app.
app.config_from_object("django.conf:settings", namespace="CELERY")


@setup_logging.connect
def config_loggers(*args, **kwargs):
    """Worker and beat logs use the same handlers as the web process."""
    from logging.config import dictConfig  # noqa: PLC0415

    from django.conf import settings  # noqa: PLC0415

    dictConfig(settings.LOGGING)


# Picks up conference.<app>.tasks modules.
app.autodiscover_tasks()
