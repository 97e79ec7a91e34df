"""
URL routing for authentication and profile APIs.

Registered routes (mounted under ``/api/`` by `config.urls`):
    - /auth/     → AuthViewSet (register, login, password reset, confirm, ...)
    - /profile/  → ProfileViewSet (me, password, two-factor)

Example:
    >>> reverse("auth-register-verify")
    '/api/auth/register/verify/'
    >>> reverse("profile-two-factor-enable")
    '/api/profile/two-factor/enable/'
"""

from rest_framework.routers import DefaultRouter

from .views import AuthViewSet, ProfileViewSet

router = DefaultRouter()

# `basename` is required since neither ViewSet defines a queryset.
router.register("auth", AuthViewSet, basename="auth")
router.register("profile", ProfileViewSet, basename="profile")

urlpatterns = router.urls
