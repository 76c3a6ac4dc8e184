"""Role gate for the conference API.

Unauthenticated requests are refused with 401 (DRF raises NotAuthenticated
when JWT is the first authenticator); authenticated users whose role is not
allowed get 403.
"""

from __future__ import annotations

from collections.abc import Iterable

from rest_framework.permissions import SAFE_METHODS
from rest_framework.permissions import BasePermission

from conference.users.models import Role

ROLE_ADMIN = Role.ADMIN.value
ROLE_VOLUNTEER = Role.VOLUNTEER.value
ROLE_ATTENDEE = Role.ATTENDEE.value


def user_role(user) -> str | None:
    if not (user and getattr(user, "is_authenticated", False)):
        return None
    if getattr(user, "is_superuser", False) or getattr(user, "is_staff", False):
        return ROLE_ADMIN
    return getattr(user, "role", None)


def user_has_role(user, roles: Iterable[str]) -> bool:
    role = user_role(user)
    return role is not None and role in set(roles)


class HasRole(BasePermission):
    """Allow authenticated users whose role is in ``allowed_roles``.

    Use :meth:`for_roles` to build a concrete permission class::

        permission_classes = [HasRole.for_roles(ROLE_ADMIN, ROLE_VOLUNTEER)]
    """

    allowed_roles: tuple[str, ...] = ()

    @classmethod
    def for_roles(cls, *roles: str) -> type[HasRole]:
        name = "Has" + "Or".join(r.title() for r in roles) + "Role"
        return type(name, (cls,), {"allowed_roles": tuple(roles)})

    def has_permission(self, request, view) -> bool:
        return user_has_role(getattr(request, "user", None), self.allowed_roles)


IsAdmin = HasRole.for_roles(ROLE_ADMIN)
IsAdminOrVolunteer = HasRole.for_roles(ROLE_ADMIN, ROLE_VOLUNTEER)


class IsAdminOrReadOnly(BasePermission):
    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return user_has_role(request.user, [ROLE_ADMIN])
