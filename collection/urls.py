"""
URL routing for the art collection API.

Registered routes (mounted under ``/api/`` by `config.urls`):
    - /collection/                          → list, create
    - /collection/{artwork_id}/             → destroy
    - /collection/{artwork_id}/note/        → note
    - /collection/{artwork_id}/check/       → check
"""

from rest_framework import routers

from .views import ArtworkViewSet

router = routers.SimpleRouter()

router.register(prefix="collection", viewset=ArtworkViewSet, basename="collection")

urlpatterns = router.urls
