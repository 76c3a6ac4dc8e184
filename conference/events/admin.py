from django.contrib import admin

from conference.events.models import Event


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["title", "kind", "custom_type", "venue", "start_time"]
    list_filter = ["kind", "rsvp_required"]
    search_fields = ["title", "venue", "custom_type"]
