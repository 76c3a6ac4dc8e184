from http import HTTPStatus
from unittest import mock

import pytest
from django.urls import reverse

from conference.complaints.api.views import ComplaintViewSet
from conference.complaints.models import Complaint
from conference.realtime.broadcasters import Broadcaster

pytestmark = pytest.mark.django_db

LIST_URL = "api_v1:complaint-list"
PUBLIC_FIELDS = {"id", "category", "priority", "status", "created_at"}


@pytest.fixture
def broadcaster():
    fake = mock.Mock(spec=Broadcaster)
    fake.emit.return_value = True
    with mock.patch.object(ComplaintViewSet, "broadcaster", fake):
        yield fake


def make_complaint(**extra):
    extra.setdefault("category", "transport")
    extra.setdefault("title", "Late shuttle")
    extra.setdefault("description", "The 8:00 bus did not come.")
    return Complaint.objects.create(**extra)


class TestFiling:
    def test_anyone_can_file(
        self,
        api_client,
        broadcaster,
        django_capture_on_commit_callbacks,
    ):
        with django_capture_on_commit_callbacks(execute=True):
            resp = api_client.post(
                reverse(LIST_URL),
                {
                    "category": "guesthouse",
                    "title": "No hot water",
                    "description": "Room 12",
                    "contactEmail": "Guest@Example.COM",
                    "contactPhone": "+91 98765 43210",
                },
                format="json",
            )
        assert resp.status_code == HTTPStatus.CREATED, resp.data
        complaint = Complaint.objects.get(pk=resp.data["id"])
        assert complaint.contact_email == "guest@example.com"
        assert complaint.priority == "medium"
        assert complaint.status == "pending"

        event, payload = broadcaster.emit.call_args.args
        assert event == "complaint:new"
        assert set(payload) == PUBLIC_FIELDS

    def test_filer_cannot_set_triage_fields(self, api_client, volunteer, broadcaster):
        resp = api_client.post(
            reverse(LIST_URL),
            {
                "category": "cleaning",
                "title": "Bins",
                "description": "Overflowing",
                "status": "resolved",
                "assignedTo": volunteer.pk,
                "response": "done",
            },
            format="json",
        )
        assert resp.status_code == HTTPStatus.CREATED
        complaint = Complaint.objects.get(pk=resp.data["id"])
        assert complaint.status == "pending"
        assert complaint.assigned_to is None
        assert complaint.response == ""

    def test_unknown_category_is_rejected(self, api_client):
        resp = api_client.post(
            reverse(LIST_URL),
            {"category": "food", "title": "x", "description": "y"},
            format="json",
        )
        assert resp.status_code == HTTPStatus.BAD_REQUEST


class TestReading:
    def test_public_feed_hides_contact_details(self, api_client):
        make_complaint(contact_email="guest@example.com", priority="high")
        resp = api_client.get(reverse("api_v1:complaint-public"))
        assert resp.status_code == HTTPStatus.OK
        (row,) = resp.json()
        assert set(row) == PUBLIC_FIELDS
        assert row["priority"] == "high"

    def test_public_feed_is_capped(self, api_client):
        Complaint.objects.bulk_create(
            Complaint(category="other", title=f"#{i}", description="-")
            for i in range(55)
        )
        resp = api_client.get(reverse("api_v1:complaint-public"))
        assert len(resp.json()) == 50

    def test_full_list_needs_token(self, api_client):
        resp = api_client.get(reverse(LIST_URL))
        assert resp.status_code == HTTPStatus.UNAUTHORIZED

    def test_full_list_is_ordered_by_urgency(self, api_client, attendee):
        low = make_complaint(priority="low")
        high = make_complaint(priority="high")
        medium_old = make_complaint(priority="medium")
        medium_new = make_complaint(priority="medium")
        api_client.force_authenticate(attendee)
        resp = api_client.get(reverse(LIST_URL))
        assert resp.status_code == HTTPStatus.OK
        assert [row["id"] for row in resp.json()] == [
            high.pk,
            medium_new.pk,
            medium_old.pk,
            low.pk,
        ]

    def test_status_filter(self, api_client, volunteer):
        make_complaint()
        resolved = make_complaint(status="resolved")
        api_client.force_authenticate(volunteer)
        resp = api_client.get(reverse(LIST_URL), {"status": "resolved"})
        assert [row["id"] for row in resp.json()] == [resolved.pk]


class TestTriage:
    def test_volunteer_assigns_and_responds(
        self,
        api_client,
        volunteer,
        broadcaster,
        django_capture_on_commit_callbacks,
    ):
        complaint = make_complaint()
        api_client.force_authenticate(volunteer)
        url = reverse("api_v1:complaint-detail", kwargs={"pk": complaint.pk})
        with django_capture_on_commit_callbacks(execute=True):
            resp = api_client.patch(
                url,
                {
                    "status": "in-progress",
                    "assignedTo": volunteer.pk,
                    "response": "Driver called",
                },
                format="json",
            )
        assert resp.status_code == HTTPStatus.OK, resp.data
        assert resp.data["assigned_to"] == {
            "id": volunteer.pk,
            "name": volunteer.name,
            "email": volunteer.email,
        }
        event, payload = broadcaster.emit.call_args.args
        assert event == "complaint:update"
        assert payload["status"] == "in-progress"
        assert set(payload) == PUBLIC_FIELDS

    def test_attendee_cannot_triage(self, api_client, attendee):
        complaint = make_complaint()
        api_client.force_authenticate(attendee)
        url = reverse("api_v1:complaint-detail", kwargs={"pk": complaint.pk})
        resp = api_client.patch(url, {"status": "closed"}, format="json")
        assert resp.status_code == HTTPStatus.FORBIDDEN

    def test_only_admin_deletes(
        self, api_client, volunteer, admin_account, broadcaster
    ):
        complaint = make_complaint()
        url = reverse("api_v1:complaint-detail", kwargs={"pk": complaint.pk})
        api_client.force_authenticate(volunteer)
        assert api_client.delete(url).status_code == HTTPStatus.FORBIDDEN
        api_client.force_authenticate(admin_account)
        assert api_client.delete(url).status_code == HTTPStatus.NO_CONTENT
