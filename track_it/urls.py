"""Root URL configuration for the Track It API."""

from django.urls import include, path

urlpatterns = [
    path("api/v1/", include("core.urls")),
]
