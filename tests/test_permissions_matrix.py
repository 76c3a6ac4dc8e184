"""Integration-style permission tests covering core RBAC scenarios."""

from datetime import timedelta

from django.utils import timezone
from rest_framework import status

from tests.permissions.mixins import ANONYMOUS
from tests.permissions.mixins import ROLE_ADMIN
from tests.permissions.mixins import ROLE_ATTENDEE
from tests.permissions.mixins import ROLE_STAFF
from tests.permissions.mixins import ROLE_VOLUNTEER
from tests.permissions.mixins import RoleAPITestCase

UNAUTHORIZED = status.HTTP_401_UNAUTHORIZED
FORBIDDEN = status.HTTP_403_FORBIDDEN


class PermissionMatrixAPITests(RoleAPITestCase):
    """Validate the most important role-based permission flows."""

    def _session_payload(self):
        start = timezone.now() + timedelta(days=1)
        return {
            "title": "Lightning talks",
            "authors": "Various",
            "hall": self.hall.pk,
            "start_time": start.isoformat(),
            "end_time": (start + timedelta(hours=1)).isoformat(),
        }

    # Tests --------------------------------------------------------------------
    def test_public_reads_need_no_token(self):
        for url_name in (
            "api_v1:hall-list",
            "api_v1:hall-live-status",
            "api_v1:schedule-list",
            "api_v1:announcement-list",
            "api_v1:event-list",
            "api_v1:menu-list",
            "api_v1:complaint-public",
        ):
            self.assert_allowed(self.get(url_name, role=ANONYMOUS))

    def test_schedule_writes_locked_to_admins(self):
        expectations = {
            ANONYMOUS: UNAUTHORIZED,
            ROLE_ATTENDEE: FORBIDDEN,
            ROLE_VOLUNTEER: FORBIDDEN,
        }
        for role, code in expectations.items():
            resp = self.post(
                "api_v1:schedule-list",
                role=role,
                payload=self._session_payload(),
            )
            self.assert_denied(resp, code)

        for role in (ROLE_ADMIN, ROLE_STAFF):
            resp = self.post(
                "api_v1:schedule-list",
                role=role,
                payload=self._session_payload(),
            )
            self.assert_http_status(resp, status.HTTP_201_CREATED)

    def test_volunteers_manage_menus_but_cannot_delete(self):
        payload = {"day": 1, "meal_type": "lunch", "items": ["Pulao"]}
        self.assert_denied(
            self.post("api_v1:menu-list", role=ROLE_ATTENDEE, payload=payload),
        )
        self.assert_allowed(
            self.post("api_v1:menu-list", role=ROLE_VOLUNTEER, payload=payload),
        )
        detail = {"pk": self.menu.pk}
        self.assert_denied(
            self.delete(
                "api_v1:menu-detail",
                role=ROLE_VOLUNTEER,
                reverse_kwargs=detail,
            ),
        )
        self.assert_allowed(
            self.delete("api_v1:menu-detail", role=ROLE_ADMIN, reverse_kwargs=detail),
        )

    def test_complaint_triage(self):
        detail = {"pk": self.complaint.pk}
        self.assert_allowed(self.get("api_v1:complaint-list", role=ROLE_ATTENDEE))
        self.assert_denied(
            self.patch(
                "api_v1:complaint-detail",
                role=ROLE_ATTENDEE,
                payload={"status": "closed"},
                reverse_kwargs=detail,
            ),
        )
        self.assert_allowed(
            self.patch(
                "api_v1:complaint-detail",
                role=ROLE_VOLUNTEER,
                payload={"status": "assigned"},
                reverse_kwargs=detail,
            ),
        )
        self.assert_denied(
            self.delete(
                "api_v1:complaint-detail",
                role=ROLE_VOLUNTEER,
                reverse_kwargs=detail,
            ),
        )

    def test_admin_only_areas(self):
        for url_name in (
            "api_v1:user-list",
            "api_v1:audit:recent",
            "api_v1:exports:schedules",
            "api_v1:exports:complaints",
        ):
            self.assert_denied(self.get(url_name, role=ANONYMOUS), UNAUTHORIZED)
            self.assert_denied(self.get(url_name, role=ROLE_VOLUNTEER))
            self.assert_allowed(self.get(url_name, role=ROLE_ADMIN))

    def test_every_role_reads_own_profile(self):
        for role in (ROLE_ATTENDEE, ROLE_VOLUNTEER, ROLE_ADMIN):
            resp = self.get("api_v1:user-me", role=role)
            self.assert_allowed(resp)
            assert resp.data["username"] == self.roles[role].user.username
