from http import HTTPStatus

import pytest
from django.urls import reverse
from rest_framework_simplejwt.tokens import AccessToken

from conference.audit.models import AuditLog
from conference.users.models import Role
from conference.users.models import User
from conference.users.tests.factories import TEST_PASSWORD

pytestmark = pytest.mark.django_db


class TestUserViewSet:
    def test_me_for_any_signed_in_user(self, api_client, volunteer):
        api_client.force_authenticate(volunteer)
        resp = api_client.get(reverse("api_v1:user-me"))
        assert resp.status_code == HTTPStatus.OK
        assert resp.data["email"] == "volunteer@example.com"
        assert resp.data["role"] == Role.VOLUNTEER
        assert "password" not in resp.data

    def test_me_requires_token(self, api_client):
        resp = api_client.get(reverse("api_v1:user-me"))
        assert resp.status_code == HTTPStatus.UNAUTHORIZED

    def test_directory_is_admin_only(self, api_client, attendee, admin_account):
        url = reverse("api_v1:user-list")
        api_client.force_authenticate(attendee)
        assert api_client.get(url).status_code == HTTPStatus.FORBIDDEN

        api_client.force_authenticate(admin_account)
        resp = api_client.get(url)
        assert resp.status_code == HTTPStatus.OK
        assert {row["username"] for row in resp.data} == {"attendee", "organiser"}

    def test_admin_changes_role_and_password(self, api_client, admin_account, attendee):
        api_client.force_authenticate(admin_account)
        url = reverse("api_v1:user-detail", kwargs={"pk": attendee.pk})
        resp = api_client.patch(
            url,
            {"role": "volunteer", "password": "n3w-secret"},
            format="json",
        )
        assert resp.status_code == HTTPStatus.OK
        attendee.refresh_from_db()
        assert attendee.role == Role.VOLUNTEER
        assert attendee.check_password("n3w-secret")
        assert AuditLog.objects.filter(resource_type="user", action="update").exists()

    def test_password_reset_is_redacted_in_audit_log(
        self, api_client, admin_account, attendee
    ):
        api_client.force_authenticate(admin_account)
        url = reverse("api_v1:user-detail", kwargs={"pk": attendee.pk})
        resp = api_client.patch(
            url,
            {"name": "Ada", "password": "S3cretPlain!"},
            format="json",
        )
        assert resp.status_code == HTTPStatus.OK

        entry = AuditLog.objects.get(resource_type="user", action="update")
        assert entry.changes == {"name": "Ada", "password": "[redacted]"}
        assert "S3cretPlain!" not in str(entry.changes)

        recent = api_client.get(reverse("api_v1:audit:recent"))
        assert "S3cretPlain!" not in str(recent.data)

    def test_username_is_read_only(self, api_client, admin_account, attendee):
        api_client.force_authenticate(admin_account)
        url = reverse("api_v1:user-detail", kwargs={"pk": attendee.pk})
        api_client.patch(url, {"username": "renamed"}, format="json")
        attendee.refresh_from_db()
        assert attendee.username == "attendee"

    def test_admin_cannot_delete_own_account(self, api_client, admin_account):
        api_client.force_authenticate(admin_account)
        url = reverse("api_v1:user-detail", kwargs={"pk": admin_account.pk})
        resp = api_client.delete(url)
        assert resp.status_code == HTTPStatus.BAD_REQUEST
        assert User.objects.filter(pk=admin_account.pk).exists()

    def test_admin_deletes_other_account(self, api_client, admin_account, attendee):
        api_client.force_authenticate(admin_account)
        url = reverse("api_v1:user-detail", kwargs={"pk": attendee.pk})
        assert api_client.delete(url).status_code == HTTPStatus.NO_CONTENT
        assert not User.objects.filter(pk=attendee.pk).exists()


class TestJWT:
    def test_token_carries_role(self, api_client, volunteer):
        resp = api_client.post(
            reverse("jwt-create"),
            {"username": "volunteer@example.com", "password": TEST_PASSWORD},
            format="json",
        )
        assert resp.status_code == HTTPStatus.OK
        assert resp.data["user"] == {
            "id": volunteer.pk,
            "email": "volunteer@example.com",
            "name": "",
            "role": "volunteer",
        }
        token = AccessToken(resp.data["access"])
        assert token["role"] == "volunteer"
        assert str(token["user_id"]) == str(volunteer.pk)

    def test_staff_token_role_is_admin(self, api_client, volunteer):
        volunteer.is_staff = True
        volunteer.save(update_fields=["is_staff"])
        resp = api_client.post(
            reverse("jwt-create"),
            {"username": "volunteer", "password": TEST_PASSWORD},
            format="json",
        )
        assert AccessToken(resp.data["access"])["role"] == "admin"

    def test_wrong_password(self, api_client, volunteer):
        resp = api_client.post(
            reverse("jwt-create"),
            {"username": "volunteer", "password": "nope"},
            format="json",
        )
        assert resp.status_code == HTTPStatus.UNAUTHORIZED

    def test_bearer_token_unlocks_gated_endpoint(self, api_client, admin_account):
        token = api_client.post(
            reverse("jwt-create"),
            {"username": "organiser", "password": TEST_PASSWORD},
            format="json",
        ).data["access"]
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        resp = api_client.get(reverse("api_v1:audit:recent"))
        assert resp.status_code == HTTPStatus.OK

    def test_invalid_bearer_is_unauthorized(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION="Bearer not-a-token")
        resp = api_client.get(reverse("api_v1:audit:recent"))
        assert resp.status_code == HTTPStatus.UNAUTHORIZED

    def test_verify_and_refresh(self, api_client, volunteer):
        pair = api_client.post(
            reverse("jwt-create"),
            {"username": "volunteer", "password": TEST_PASSWORD},
            format="json",
        ).data
        verify = api_client.post(
            reverse("jwt-verify"),
            {"token": pair["access"]},
            format="json",
        )
        assert verify.status_code == HTTPStatus.OK
        refresh = api_client.post(
            reverse("jwt-refresh"),
            {"refresh": pair["refresh"]},
            format="json",
        )
        assert refresh.status_code == HTTPStatus.OK
        assert "access" in refresh.data
