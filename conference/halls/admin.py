from django.contrib import admin

from conference.halls.models import Hall


@admin.register(Hall)
class HallAdmin(admin.ModelAdmin):
    list_display = ["code", "name", "capacity", "location"]
    search_fields = ["code", "name", "location"]
