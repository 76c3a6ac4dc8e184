from http import HTTPStatus
from unittest import mock

import pytest
from django.urls import reverse

from conference.realtime.api.views import RelayEmitView

pytestmark = pytest.mark.django_db


@pytest.fixture
def local_sockets():
    fake = mock.Mock()
    fake.emit.return_value = True
    with (
        mock.patch.object(RelayEmitView, "broadcaster", fake),
        mock.patch(
            "conference.realtime.api.views.connected_client_count",
            return_value=4,
        ),
    ):
        yield fake


def post(client, body, token=None):
    extra = {} if token is None else {"HTTP_X_RELAY_TOKEN": token}
    return client.post(reverse("relay-emit"), body, format="json", **extra)


def test_relays_known_event(api_client, local_sockets):
    resp = post(api_client, {"event": "schedule:update", "data": {"id": 5}})
    assert resp.status_code == HTTPStatus.OK
    assert resp.json() == {"success": True, "event": "schedule:update", "clients": 4}
    local_sockets.emit.assert_called_once_with("schedule:update", {"id": 5})


def test_missing_event_is_rejected(api_client, local_sockets):
    resp = post(api_client, {"data": {"id": 5}})
    assert resp.status_code == HTTPStatus.BAD_REQUEST
    assert resp.json() == {"error": "Event name is required"}
    local_sockets.emit.assert_not_called()


def test_unknown_event_is_rejected(api_client, local_sockets):
    resp = post(api_client, {"event": "schedule:explode", "data": {}})
    assert resp.status_code == HTTPStatus.BAD_REQUEST
    assert "event" in resp.json()
    local_sockets.emit.assert_not_called()


def test_shared_secret_is_enforced(api_client, local_sockets, settings):
    settings.SOCKET_RELAY_TOKEN = "relay-secret"  # noqa: S105
    body = {"event": "menu:new", "data": {"id": 1}}

    denied = post(api_client, body, token="wrong")
    assert denied.status_code == HTTPStatus.FORBIDDEN

    missing = post(api_client, body)
    assert missing.status_code == HTTPStatus.FORBIDDEN

    allowed = post(api_client, body, token="relay-secret")
    assert allowed.status_code == HTTPStatus.OK
    local_sockets.emit.assert_called_once()


def test_bearer_credentials_are_not_required(api_client, local_sockets):
    resp = api_client.post(
        reverse("relay-emit"),
        {"event": "announcement:delete", "data": {"id": 9}},
        format="json",
        HTTP_AUTHORIZATION="Bearer not-a-jwt",
    )
    assert resp.status_code == HTTPStatus.OK
