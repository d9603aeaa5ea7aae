"""URL routes. Everything public lives under `/api/v1/`; `/health` is served by Starlette."""

from django.urls import include, path

urlpatterns = [
    path("api/v1/teams", include("apps.teams.urls")),
]

handler404 = "apps.core.views.custom_handler.json_404_handler"
handler500 = "apps.core.views.custom_handler.json_500_handler"
