from django.contrib import admin

from conference.menus.models import Menu


@admin.register(Menu)
class MenuAdmin(admin.ModelAdmin):
    list_display = ["day", "meal_type", "updated_at"]
    list_filter = ["day", "meal_type"]
