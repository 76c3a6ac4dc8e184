import pytest
from django.contrib.auth import get_user_model

from conference.users.auth_backends import EmailOrUsernameBackend

pytestmark = pytest.mark.django_db
User = get_user_model()


class TestEmailOrUsernameBackend:
    def setup_method(self):
        self.backend = EmailOrUsernameBackend()
        self.password = "Sahm1232"  # noqa: S105  # Allow hardcoded password in test
        self.user = User.objects.create_user(
            username="speaker",
            email="Speaker@Example.com",
            password=self.password,
        )

    def test_email_is_stored_lowercase(self):
        assert self.user.email == "speaker@example.com"

    def test_authenticate_with_username(self):
        user = self.backend.authenticate(
            None,
            username="speaker",
            password=self.password,
        )
        assert user == self.user

    def test_authenticate_with_email_in_any_case(self):
        user = self.backend.authenticate(
            None,
            username="SPEAKER@example.com ",
            password=self.password,
        )
        assert user == self.user

    @pytest.mark.parametrize(
        ("username", "password"),
        [
            ("nobody", "Sahm1232"),
            ("nobody@example.com", "Sahm1232"),
            ("speaker", "wrongpass"),
            ("speaker@example.com", "wrongpass"),
            ("speaker", None),
        ],
    )
    def test_rejects_bad_credentials(self, username, password):
        user = self.backend.authenticate(None, username=username, password=password)
        assert user is None

    def test_inactive_user_is_rejected(self):
        self.user.is_active = False
        self.user.save(update_fields=["is_active"])
        user = self.backend.authenticate(
            None,
            username="speaker",
            password=self.password,
        )
        assert user is None
