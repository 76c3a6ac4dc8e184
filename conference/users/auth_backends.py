from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend


class EmailOrUsernameBackend(ModelBackend):
    """Let attendees sign in with their e-mail address as the login name."""

    def authenticate(self, request, username=None, password=None, **kwargs):
        if username is None or password is None:
            return None
        user_model = get_user_model()
        user = (
            user_model._default_manager.filter(email__iexact=username.strip()).first()  # noqa: SLF001
            or user_model._default_manager.filter(username__iexact=username).first()  # noqa: SLF001
        )
        if user is None:
            # Run the hasher anyway to keep timing comparable.
            user_model().set_password(password)
            return None

        if user.check_password(password) and self.user_can_authenticate(user):
            return user
        return None
