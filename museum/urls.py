"""
URL routing for the museum proxy.

Registered routes (mounted under ``/api/`` by `config.urls`):
    - /met/object/{id}/
    - /met/search/
    - /met/period/
    - /met/batch/
"""

from rest_framework import routers

from .views import MuseumViewSet

router = routers.SimpleRouter()

router.register(prefix="met", viewset=MuseumViewSet, basename="met")

urlpatterns = router.urls
