from __future__ import annotations

from django_filters import rest_framework as filters

from conference.schedules.models import Session
from conference.schedules.models import SessionStatus


class SessionFilter(filters.FilterSet):
    hall = filters.NumberFilter(field_name="hall_id")
    status = filters.ChoiceFilter(choices=SessionStatus.choices)
    day = filters.DateFilter(method="filter_day", label="Day (YYYY-MM-DD)")
    tags = filters.CharFilter(method="filter_tags", label="Comma separated tags")

    class Meta:
        model = Session
        fields = ["hall", "status", "day", "tags", "is_plenary"]

    def filter_day(self, queryset, name, value):
        # __date is evaluated in the conference time zone.
        return queryset.filter(start_time__date=value)

    def filter_tags(self, queryset, name, value):
        wanted = {tag.strip() for tag in value.split(",") if tag.strip()}
        if not wanted:
            return queryset
        # JSON containment lookups are not portable to SQLite; match in Python.
        ids = [
            pk
            for pk, tags in queryset.values_list("pk", "tags")
            if wanted.intersection(tags or [])
        ]
        return queryset.filter(pk__in=ids)
