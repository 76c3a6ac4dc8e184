from django.contrib.auth.signals import user_logged_in
from django.dispatch import receiver

from .utils import log_action


@receiver(user_logged_in)
def on_user_logged_in(sender, request, user, **kwargs):
    log_action(
        "login",
        actor=user,
        resource_type="user",
        resource_id=user.pk,
        request=request,
    )
