from django.conf import settings
from django.urls import include
from django.urls import path
from rest_framework.routers import DefaultRouter
from rest_framework.routers import SimpleRouter

from conference.announcements.api.views import AnnouncementViewSet
from conference.complaints.api.views import ComplaintViewSet
from conference.events.api.views import EventViewSet
from conference.halls.api.views import HallViewSet
from conference.menus.api.views import MenuViewSet
from conference.schedules.api.views import SessionViewSet
from conference.users.api.views import UserViewSet

router = DefaultRouter() if settings.DEBUG else SimpleRouter()

router.register("users", UserViewSet, basename="user")
router.register("halls", HallViewSet, basename="hall")
router.register("schedules", SessionViewSet, basename="schedule")
router.register("announcements", AnnouncementViewSet, basename="announcement")
router.register("events", EventViewSet, basename="event")
router.register("complaints", ComplaintViewSet, basename="complaint")
router.register("menus", MenuViewSet, basename="menu")


app_name = "api"
urlpatterns = [
    path(
        "audit/",
        include(("conference.audit.api.urls", "audit"), namespace="audit"),
    ),
    path(
        "export/",
        include(("conference.exports.urls", "exports"), namespace="exports"),
    ),
    *router.urls,
]
