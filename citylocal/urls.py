"""URL configuration for the CityLocal directory API.

Every app contributes its routes below `/api/`.
"""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("common.api.urls")),
    path("api/", include("user_auth_app.api.urls")),
    path("api/", include("profiles.api.urls")),
    path("api/", include("categories.api.urls")),
    path("api/", include("businesses.api.urls")),
    path("api/", include("reviews.api.urls")),
    path("api/", include("activities.api.urls")),
    path("api/", include("contacts.api.urls")),
]
