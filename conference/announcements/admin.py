from django.contrib import admin

from conference.announcements.models import Announcement


@admin.register(Announcement)
class AnnouncementAdmin(admin.ModelAdmin):
    list_display = ["title", "type", "priority", "created_by", "created_at"]
    list_filter = ["type", "priority"]
    search_fields = ["title", "content"]
