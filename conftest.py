"""
Shared pytest fixtures.

    - `api_client`: A DRF `APIClient`.
    - `user_factory`: `accounts.factories.UserFactory` with database access.
    - `clear_cache` (autouse): Empties the cache around every test so codes,
      pending registrations, throttle counters and museum responses never
      leak between tests.
"""

import pytest
from django.core.cache import cache
from rest_framework.test import APIClient


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    """Provides a DRF API client for making requests in tests."""
    return APIClient()


@pytest.fixture
def user_factory(db):
    from accounts.factories import UserFactory

    return UserFactory
