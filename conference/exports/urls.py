from django.urls import path

from conference.exports.views import ComplaintExportView
from conference.exports.views import ScheduleExportView

app_name = "exports"

urlpatterns = [
    path("schedules/", ScheduleExportView.as_view(), name="schedules"),
    path("complaints/", ComplaintExportView.as_view(), name="complaints"),
]
