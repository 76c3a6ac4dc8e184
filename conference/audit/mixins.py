from __future__ import annotations

from conference.audit.utils import log_action


class AuditedViewSetMixin:
    """Record create/update/delete on a ModelViewSet in the audit log.

    Only authenticated actors are recorded. Subclasses set
    ``audit_resource`` (e.g. ``"schedule"``).
    """

    audit_resource: str = ""

    def audit(self, action: str, resource_id, changes=None) -> None:
        request = self.request
        user = getattr(request, "user", None)
        if not (user and user.is_authenticated):
            return
        log_action(
            action,
            actor=user,
            resource_type=self.audit_resource,
            resource_id=resource_id,
            changes=changes,
            request=request,
        )

    def perform_create(self, serializer):
        super().perform_create(serializer)
        self.audit("create", serializer.instance.pk, self.request.data)

    def perform_update(self, serializer):
        super().perform_update(serializer)
        self.audit("update", serializer.instance.pk, self.request.data)

    def perform_destroy(self, instance):
        pk = instance.pk
        super().perform_destroy(instance)
        self.audit("delete", pk)
