import pytest
from django.contrib.auth.models import Group

from conference.users.models import Role
from conference.users.models import User

from .factories import make_user

pytestmark = pytest.mark.django_db


def test_name_defaults_to_first_and_last():
    user = User.objects.create_user(
        username="ada",
        email="ada@example.com",
        first_name="Ada",
        last_name="Lovelace",
    )
    assert user.name == "Ada Lovelace"


def test_staff_counts_as_admin():
    user = make_user("desk")
    assert user.effective_role == Role.ATTENDEE
    user.is_staff = True
    assert user.effective_role == Role.ADMIN


def test_role_group_follows_role():
    user = make_user("helper", Role.VOLUNTEER)
    assert list(user.groups.values_list("name", flat=True)) == ["Volunteer"]

    user.role = Role.ADMIN
    user.save()

    assert list(user.groups.values_list("name", flat=True)) == ["Admin"]
    assert Group.objects.filter(name="Volunteer").exists()


def test_unrelated_groups_are_kept():
    user = make_user("press")
    press = Group.objects.create(name="Press")
    user.groups.add(press)
    user.role = Role.VOLUNTEER
    user.save()
    assert set(user.groups.values_list("name", flat=True)) == {"Press", "Volunteer"}
