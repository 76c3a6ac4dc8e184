"""Load a small demo programme: halls, sessions, social events and menus."""

from datetime import datetime
from datetime import time
from datetime import timedelta

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone
from django.utils.translation import gettext as _

from conference.events.models import Event
from conference.events.types import EventType
from conference.halls.models import Hall
from conference.menus.models import Menu
from conference.schedules.models import Session
from conference.users.models import Role

HALLS = (
    ("A", "Main Auditorium", 500, "Ground Floor, Block A"),
    ("B", "Seminar Hall B", 150, "First Floor, Block B"),
    ("C", "Seminar Hall C", 120, "First Floor, Block C"),
)

# (hall code, day offset, start "HH:MM", minutes, title, authors, tags, plenary)
SESSIONS = (
    ("A", 0, "09:00", 60, "Opening Keynote", "Conference Chair", ["keynote"], True),
    (
        "A", 0, "10:30", 90, "Plenary: Future Directions", "Invited Panel",
        ["panel"], True,
    ),
    (
        "B", 0, "10:30", 60, "Distributed Systems I", "R. Iyer; M. Chen",
        ["systems"], False,
    ),
    ("C", 0, "10:30", 60, "Machine Learning I", "S. Patel", ["ml"], False),
    ("B", 1, "09:30", 60, "Distributed Systems II", "A. Novak", ["systems"], False),
    (
        "C", 1, "09:30", 60, "Machine Learning II", "L. Okafor",
        ["ml", "vision"], False,
    ),
)  # fmt: skip

MENUS = {
    "breakfast": ["Idli", "Sambar", "Coffee"],
    "lunch": ["Rice", "Dal", "Vegetable curry"],
    "tea": ["Tea", "Biscuits"],
}


class Command(BaseCommand):
    help = _("Seed demo conference data")

    def add_arguments(self, parser):
        parser.add_argument(
            "--start",
            help="First conference day as YYYY-MM-DD (default: today)",
        )
        parser.add_argument("--admin-email", default="admin@conference.local")
        parser.add_argument("--admin-password", default="admin123")

    @transaction.atomic
    def handle(self, *args, **options):
        first_day = (
            datetime.strptime(options["start"], "%Y-%m-%d").date()  # noqa: DTZ007
            if options["start"]
            else timezone.localdate()
        )
        self._seed_admin(options["admin_email"], options["admin_password"])
        halls = self._seed_halls()
        created = self._seed_sessions(halls, first_day)
        self._seed_events(first_day)
        self._seed_menus()
        self.stdout.write(
            self.style.SUCCESS(
                f"Seeded {len(halls)} hall(s) and {created} new session(s)",
            ),
        )

    def _at(self, day, hhmm: str):
        hours, minutes = (int(part) for part in hhmm.split(":"))
        return timezone.make_aware(datetime.combine(day, time(hours, minutes)))

    def _seed_admin(self, email: str, password: str) -> None:
        user_model = get_user_model()
        user, created = user_model.objects.get_or_create(
            email=email,
            defaults={
                "username": email,
                "name": "Conference Admin",
                "role": Role.ADMIN,
            },
        )
        if created:
            user.set_password(password)
            user.save(update_fields=["password"])
            self.stdout.write(f"Created admin account {email}")

    def _seed_halls(self) -> dict[str, Hall]:
        halls = {}
        for code, name, capacity, location in HALLS:
            hall, _ = Hall.objects.update_or_create(
                code=code,
                defaults={"name": name, "capacity": capacity, "location": location},
            )
            halls[code] = hall
        return halls

    def _seed_sessions(self, halls, first_day) -> int:
        created = 0
        for code, offset, start, minutes, title, authors, tags, plenary in SESSIONS:
            start_at = self._at(first_day + timedelta(days=offset), start)
            _, was_created = Session.objects.get_or_create(
                hall=halls[code],
                title=title,
                start_time=start_at,
                defaults={
                    "authors": authors,
                    "end_time": start_at + timedelta(minutes=minutes),
                    "tags": tags,
                    "is_plenary": plenary,
                },
            )
            created += int(was_created)
        return created

    def _seed_events(self, first_day) -> None:
        events = (
            ("Conference Dinner", EventType.parse("dinner"), 0, "19:30", "Hotel Lawn"),
            (
                "Classical Music Evening",
                EventType.parse("cultural"),
                1,
                "18:00",
                "Open Air Theatre",
            ),
            ("Heritage Walk", EventType.custom("Excursion"), 2, "07:00", "Main Gate"),
        )
        for title, event_type, offset, start, venue in events:
            start_at = self._at(first_day + timedelta(days=offset), start)
            if Event.objects.filter(title=title).exists():
                continue
            event = Event(
                title=title,
                description=title,
                venue=venue,
                start_time=start_at,
                end_time=start_at + timedelta(hours=2),
            )
            event.event_type = event_type
            event.save()

    def _seed_menus(self) -> None:
        for day in (1, 2, 3):
            for meal_type, items in MENUS.items():
                Menu.objects.update_or_create(
                    day=day,
                    meal_type=meal_type,
                    defaults={"items": items},
                )
