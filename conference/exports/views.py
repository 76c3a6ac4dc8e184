"""CSV downloads for organisers."""

from __future__ import annotations

import csv
from collections.abc import Iterable
from collections.abc import Sequence

from django.http import HttpResponse
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema
from rest_framework.views import APIView

from conference.complaints.models import Complaint
from conference.schedules.models import Session
from conference.users.api.permissions import IsAdmin

SCHEDULE_HEADERS = (
    "title",
    "authors",
    "hall",
    "startTime",
    "endTime",
    "status",
    "tags",
    "slideLink",
)
COMPLAINT_HEADERS = (
    "category",
    "priority",
    "title",
    "description",
    "status",
    "assignedTo",
    "contactEmail",
    "contactPhone",
    "response",
    "createdAt",
)

# Leading characters a spreadsheet treats as the start of a formula.
FORMULA_PREFIXES = ("=", "+", "-", "@", "\t", "\r")


def _cell(value: object) -> object:
    if value is None:
        return ""
    if isinstance(value, str) and value.startswith(FORMULA_PREFIXES):
        return f"'{value}"
    return value


def csv_response(
    filename: str,
    headers: Sequence[str],
    rows: Iterable[Sequence[object]],
) -> HttpResponse:
    response = HttpResponse(content_type="text/csv")
    response["Content-Disposition"] = f"attachment; filename={filename}"
    writer = csv.writer(response, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(headers)
    for row in rows:
        writer.writerow([_cell(value) for value in row])
    return response


class ScheduleExportView(APIView):
    permission_classes = [IsAdmin]

    @extend_schema(tags=["Exports"], responses={(200, "text/csv"): OpenApiTypes.STR})
    def get(self, request):
        sessions = Session.objects.select_related("hall").order_by("start_time", "id")
        rows = (
            (
                s.title,
                s.authors,
                s.hall.name,
                s.start_time.isoformat(),
                s.end_time.isoformat(),
                s.status,
                "; ".join(s.tags or []),
                s.slide_link,
            )
            for s in sessions
        )
        return csv_response("schedules.csv", SCHEDULE_HEADERS, rows)


class ComplaintExportView(APIView):
    permission_classes = [IsAdmin]

    @extend_schema(tags=["Exports"], responses={(200, "text/csv"): OpenApiTypes.STR})
    def get(self, request):
        complaints = Complaint.objects.select_related("assigned_to").order_by(
            "-created_at",
            "-id",
        )
        rows = (
            (
                c.category,
                c.priority,
                c.title,
                c.description,
                c.status,
                c.assigned_to.name if c.assigned_to_id else "",
                c.contact_email,
                c.contact_phone,
                c.response,
                c.created_at.isoformat(),
            )
            for c in complaints
        )
        return csv_response("complaints.csv", COMPLAINT_HEADERS, rows)
