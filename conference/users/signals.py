from __future__ import annotations

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from django.db.models.signals import post_save
from django.dispatch import receiver

from conference.users.models import ROLE_GROUPS


@receiver(post_save, sender=get_user_model())
def sync_role_group(sender, instance, created, **kwargs):
    """Keep the user in exactly one role group, the one matching ``role``.

    Groups are created on demand so a fresh database works before
    ``setup_rbac`` has been run.
    """

    wanted = ROLE_GROUPS.get(instance.role)
    if wanted is None:
        return
    current = set(
        instance.groups.filter(name__in=list(ROLE_GROUPS.values())).values_list(
            "name", flat=True
        )
    )
    if current == {wanted}:
        return

    stale = list(Group.objects.filter(name__in=current - {wanted}))
    if stale:
        instance.groups.remove(*stale)
    group, _ = Group.objects.get_or_create(name=wanted)
    instance.groups.add(group)
