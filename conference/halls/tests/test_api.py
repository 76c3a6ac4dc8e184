from datetime import timedelta
from http import HTTPStatus
from unittest import mock

import pytest
from django.db import DatabaseError
from django.urls import reverse
from django.utils import timezone

from conference.audit.models import AuditLog
from conference.halls.api.views import NO_CACHE_HEADERS
from conference.halls.models import Hall
from conference.schedules.tests.factories import make_session

pytestmark = pytest.mark.django_db

STATUS_URL = "api_v1:hall-live-status"


def assert_not_cached(resp):
    for header, value in NO_CACHE_HEADERS.items():
        assert resp[header] == value


class TestHallStatusEndpoint:
    def test_reports_every_hall(self, api_client, hall, other_hall):
        now = timezone.now()
        running = make_session(hall, now - timedelta(minutes=20), minutes=50)
        upcoming = make_session(hall, now + timedelta(hours=1))

        resp = api_client.get(reverse(STATUS_URL))

        assert resp.status_code == HTTPStatus.OK
        assert_not_cached(resp)
        first, second = resp.json()
        assert first["hall"]["code"] == "A"
        assert first["current"]["id"] == running.pk
        assert first["current"]["computed_status"] == "ongoing"
        assert first["next"]["id"] == upcoming.pk
        assert first["time_remaining"] in {29, 30}
        assert second == {
            "hall": {
                "id": other_hall.pk,
                "name": "Seminar Hall B",
                "code": "B",
                "location": "First Floor",
            },
            "current": None,
            "next": None,
            "time_remaining": None,
        }

    def test_status_query_flag_on_list(self, api_client, hall):
        resp = api_client.get(reverse("api_v1:hall-list"), {"status": "true"})
        assert resp.status_code == HTTPStatus.OK
        assert_not_cached(resp)
        assert resp.json()[0]["hall"]["id"] == hall.pk

    def test_database_failure_returns_500_without_partial_data(self, api_client, hall):
        with mock.patch(
            "conference.halls.api.views.resolve_hall_statuses",
            side_effect=DatabaseError("connection lost"),
        ):
            resp = api_client.get(reverse(STATUS_URL))
        assert resp.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
        assert resp.json() == {"error": "Failed to fetch hall status"}
        assert_not_cached(resp)


class TestHallCrud:
    def test_plain_list_is_public(self, api_client, hall):
        resp = api_client.get(reverse("api_v1:hall-list"))
        assert resp.status_code == HTTPStatus.OK
        assert resp.json()[0]["capacity"] == 500

    def test_only_admin_creates(self, api_client, volunteer, admin_account):
        payload = {"name": "Hall C", "code": "c", "capacity": 80, "location": "Annex"}
        url = reverse("api_v1:hall-list")

        api_client.force_authenticate(volunteer)
        assert api_client.post(url, payload, format="json").status_code == 403

        api_client.force_authenticate(admin_account)
        resp = api_client.post(url, payload, format="json")
        assert resp.status_code == HTTPStatus.CREATED
        assert resp.data["code"] == "C"
        assert AuditLog.objects.filter(resource_type="hall", action="create").exists()

    def test_code_is_unique_case_insensitively(self, api_client, admin_account, hall):
        api_client.force_authenticate(admin_account)
        resp = api_client.post(
            reverse("api_v1:hall-list"),
            {"name": "Dup", "code": "a", "capacity": 10, "location": "x"},
            format="json",
        )
        assert resp.status_code == HTTPStatus.BAD_REQUEST
        assert "code" in resp.data
        assert Hall.objects.count() == 1

    def test_capacity_must_be_positive(self, api_client, admin_account):
        api_client.force_authenticate(admin_account)
        resp = api_client.post(
            reverse("api_v1:hall-list"),
            {"name": "Tiny", "code": "T", "capacity": 0, "location": "x"},
            format="json",
        )
        assert resp.status_code == HTTPStatus.BAD_REQUEST
