from django.urls import include, path

from planner.views.health import healthz

urlpatterns = [
    path("healthz", healthz),
    path("api/", include("planner.urls")),
]
