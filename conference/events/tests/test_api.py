from datetime import timedelta
from http import HTTPStatus
from unittest import mock

import pytest
from django.urls import reverse
from django.utils import timezone

from conference.events.api.views import EventViewSet
from conference.events.models import Event
from conference.realtime.broadcasters import Broadcaster

pytestmark = pytest.mark.django_db

LIST_URL = "api_v1:event-list"


@pytest.fixture
def broadcaster():
    fake = mock.Mock(spec=Broadcaster)
    fake.emit.return_value = True
    with mock.patch.object(EventViewSet, "broadcaster", fake):
        yield fake


def make_event(event_type="dinner", start=None, **extra):
    start = start or timezone.now() + timedelta(days=1)
    event = Event(
        title=extra.pop("title", "Conference Dinner"),
        description="Evening programme",
        venue="Hotel Lawn",
        start_time=start,
        end_time=start + timedelta(hours=2),
        **extra,
    )
    event.event_type = event_type
    event.save()
    return event


def event_payload(**overrides):
    start = timezone.now() + timedelta(days=2)
    payload = {
        "title": "Boat Ride",
        "type": "Boat trip",
        "description": "Sunset on the lake",
        "venue": "Jetty",
        "startTime": start.isoformat(),
        "endTime": (start + timedelta(hours=1)).isoformat(),
        "rsvpRequired": "1",
    }
    payload.update(overrides)
    return payload


def test_admin_creates_custom_event(
    api_client,
    admin_account,
    broadcaster,
    django_capture_on_commit_callbacks,
):
    api_client.force_authenticate(admin_account)
    with django_capture_on_commit_callbacks(execute=True):
        resp = api_client.post(reverse(LIST_URL), event_payload(), format="json")
    assert resp.status_code == HTTPStatus.CREATED, resp.data
    assert resp.data["type"] == "Boat trip"
    assert resp.data["type_kind"] == "custom"
    assert resp.data["rsvp_required"] is True
    event = Event.objects.get(pk=resp.data["id"])
    assert event.custom_type == "Boat trip"
    assert broadcaster.emit.call_args.args[0] == "event:new"


@pytest.mark.parametrize("bad_type", ["other", "", "   "])
def test_meaningless_type_is_rejected(api_client, admin_account, broadcaster, bad_type):
    api_client.force_authenticate(admin_account)
    resp = api_client.post(
        reverse(LIST_URL),
        event_payload(type=bad_type),
        format="json",
    )
    assert resp.status_code == HTTPStatus.BAD_REQUEST
    assert "type" in resp.data


def test_end_must_follow_start(api_client, admin_account, broadcaster):
    api_client.force_authenticate(admin_account)
    start = timezone.now()
    resp = api_client.post(
        reverse(LIST_URL),
        event_payload(startTime=start.isoformat(), endTime=start.isoformat()),
        format="json",
    )
    assert resp.status_code == HTTPStatus.BAD_REQUEST


def test_volunteer_cannot_write(api_client, volunteer):
    api_client.force_authenticate(volunteer)
    resp = api_client.post(reverse(LIST_URL), event_payload(), format="json")
    assert resp.status_code == HTTPStatus.FORBIDDEN


def test_filters(api_client):
    dinner = make_event("dinner")
    walk = make_event("Heritage walk", title="Walk")
    make_event("cultural", start=timezone.now() - timedelta(days=1), title="Past")
    url = reverse(LIST_URL)

    assert [e["id"] for e in api_client.get(url, {"type": "Dinner"}).json()] == [
        dinner.pk,
    ]
    custom = api_client.get(url, {"type": "heritage WALK"}).json()
    assert [e["id"] for e in custom] == [walk.pk]
    assert api_client.get(url, {"type": "other"}).json() == []

    upcoming = api_client.get(url, {"upcoming": "true"}).json()
    assert {e["id"] for e in upcoming} == {dinner.pk, walk.pk}


def test_change_from_custom_to_well_known(api_client, admin_account, broadcaster):
    event = make_event("Heritage walk")
    api_client.force_authenticate(admin_account)
    resp = api_client.patch(
        reverse("api_v1:event-detail", kwargs={"pk": event.pk}),
        {"type": "cultural"},
        format="json",
    )
    assert resp.status_code == HTTPStatus.OK
    event.refresh_from_db()
    assert event.kind == "cultural"
    assert event.custom_type == ""
