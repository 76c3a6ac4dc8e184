from django.contrib import admin

from conference.audit import models


@admin.register(models.AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ["id", "action", "actor", "resource_type", "resource_id", "created_at"]
    search_fields = ["action", "resource_type", "resource_id", "ip_address"]
    list_filter = ["action", "resource_type", "created_at"]
    readonly_fields = [f.name for f in models.AuditLog._meta.fields]  # noqa: SLF001

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
