from django.urls import path

from planner.views.optimise import optimise_route

urlpatterns = [
    path("optimise-route", optimise_route),
]
