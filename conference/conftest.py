import pytest
from rest_framework.test import APIClient

from conference.halls.models import Hall
from conference.users.models import Role
from conference.users.models import User
from conference.users.tests.factories import make_user


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def user(db) -> User:
    return make_user("attendee")


@pytest.fixture
def attendee(user) -> User:
    return user


@pytest.fixture
def volunteer(db) -> User:
    return make_user("volunteer", Role.VOLUNTEER)


@pytest.fixture
def admin_account(db) -> User:
    return make_user("organiser", Role.ADMIN)


@pytest.fixture
def hall(db) -> Hall:
    return Hall.objects.create(
        name="Main Auditorium",
        code="a",
        capacity=500,
        location="Ground Floor",
    )


@pytest.fixture
def other_hall(db) -> Hall:
    return Hall.objects.create(
        name="Seminar Hall B",
        code="B",
        capacity=150,
        location="First Floor",
    )
