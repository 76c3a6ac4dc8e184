from django.contrib import admin

from conference.complaints.models import Complaint


@admin.register(Complaint)
class ComplaintAdmin(admin.ModelAdmin):
    list_display = ["title", "category", "priority", "status", "assigned_to"]
    list_filter = ["category", "priority", "status"]
    search_fields = ["title", "description", "contact_email"]
    raw_id_fields = ["assigned_to"]
