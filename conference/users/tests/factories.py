from __future__ import annotations

from conference.users.models import Role
from conference.users.models import User

TEST_PASSWORD = "TestPass123!"  # noqa: S105 - test credentials only


def make_user(username: str, role: str = Role.ATTENDEE, **extra) -> User:
    return User.objects.create_user(
        username=username,
        email=f"{username}@example.com",
        password=TEST_PASSWORD,
        role=role,
        **extra,
    )
