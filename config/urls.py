"""
Root URL configuration.

    /admin/         Django admin
    /api/           accounts (auth, profile), collection and museum APIs
    /api/schema/    OpenAPI schema (drf-spectacular)
    /api/docs/      Swagger UI
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="docs"),
    path("api/", include("accounts.urls")),
    path("api/", include("collection.urls")),
    path("api/", include("museum.urls")),
]
