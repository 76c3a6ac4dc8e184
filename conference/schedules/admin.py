from django.contrib import admin

from conference.schedules.models import Session


@admin.register(Session)
class SessionAdmin(admin.ModelAdmin):
    list_display = ["title", "hall", "start_time", "end_time", "status", "is_plenary"]
    list_filter = ["status", "hall", "is_plenary"]
    search_fields = ["title", "authors"]
    date_hierarchy = "start_time"
    list_select_related = ["hall"]
