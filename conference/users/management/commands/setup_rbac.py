from collections import defaultdict
from contextlib import suppress

from django.apps import apps
from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from django.contrib.auth.models import Permission
from django.contrib.contenttypes.models import ContentType
from django.core.management.base import BaseCommand
from django.utils.translation import gettext as _

from conference.users.models import ROLE_GROUPS
from conference.users.models import Role

FULL_ACTIONS = ("add", "change", "delete", "view")
MANAGE_ACTIONS = ("add", "change", "view")
TRIAGE_ACTIONS = ("change", "view")
READ_ACTIONS = ("view",)

# Admin receives every permission of every model listed in any rule below.
ROLE_APP_ACTIONS = {
    Role.VOLUNTEER: {
        "announcements": MANAGE_ACTIONS,
        "menus": MANAGE_ACTIONS,
        "complaints": TRIAGE_ACTIONS,
        "schedules": READ_ACTIONS,
        "halls": READ_ACTIONS,
        "events": READ_ACTIONS,
    },
    Role.ATTENDEE: {
        "announcements": READ_ACTIONS,
        "menus": READ_ACTIONS,
        "schedules": READ_ACTIONS,
        "halls": READ_ACTIONS,
        "events": READ_ACTIONS,
    },
}

ADMIN_ONLY_APPS = ("audit", "users")


class Command(BaseCommand):
    help = _("Create one group per conference role and assign model permissions")

    def handle(self, *args, **options):
        user_model = get_user_model()
        models = self._collect_models(user_model)
        roles = self._build_roles(models)
        self._apply_roles(roles)
        self.stdout.write(self.style.SUCCESS("RBAC setup complete"))

    def _collect_models(self, user_model):
        """Gather models from target apps to drive permission creation."""

        seen_models: set[type] = set()
        collected: list[type] = []

        def add_model(model):
            if model not in seen_models:
                seen_models.add(model)
                collected.append(model)

        add_model(user_model)
        for label in sorted(self._target_app_labels()):
            for model in self._collect_app_models(label):
                add_model(model)
        return collected

    def _target_app_labels(self):
        labels = set(ADMIN_ONLY_APPS)
        for rules in ROLE_APP_ACTIONS.values():
            labels.update(rules.keys())
        return labels

    def _collect_app_models(self, label):
        with suppress(LookupError):
            return list(apps.get_app_config(label).get_models())
        return []

    def _build_roles(self, models):
        admin_perm_ids: set[int] = set()
        role_perm_ids: dict[str, set[int]] = defaultdict(set)

        for model in models:
            ct = ContentType.objects.get_for_model(model)
            model_perms = list(Permission.objects.filter(content_type=ct))
            if not model_perms:
                continue

            admin_perm_ids.update(perm.pk for perm in model_perms)

            model_name = model._meta.model_name  # noqa: SLF001
            app_label = model._meta.app_label  # noqa: SLF001
            perms_by_codename = {perm.codename: perm for perm in model_perms}

            for role, app_rules in ROLE_APP_ACTIONS.items():
                for action in app_rules.get(app_label, ()):
                    perm = perms_by_codename.get(f"{action}_{model_name}")
                    if perm:
                        role_perm_ids[ROLE_GROUPS[role]].add(perm.pk)

        roles = {
            ROLE_GROUPS[Role.ADMIN]: Permission.objects.filter(pk__in=admin_perm_ids),
        }
        for group_name, perm_ids in role_perm_ids.items():
            roles[group_name] = Permission.objects.filter(pk__in=perm_ids)
        return roles

    def _apply_roles(self, roles):
        """Create/update groups and replace their permissions."""

        for group_name, perms in roles.items():
            group, _ = Group.objects.get_or_create(name=group_name)
            group.permissions.set(perms)
            self.stdout.write(f"{group_name}: {perms.count()} permission(s)")
