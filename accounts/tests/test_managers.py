"""
Unit tests for `UserManager`.

This module verifies that the manager methods for creating users and
superusers, as well as email lookup, behave correctly.

Tested methods include:
    - create_user
    - create_superuser
    - find_by_email
"""

import pytest

from accounts.models import User


@pytest.mark.django_db
class TestUserManager:
    """
    Test suite for `User.objects` (`UserManager`).
    """

    def test_create_user_normalizes_email(self):
        user = User.objects.create_user(
            email="  Ada.Lovelace@Example.COM ", name="Ada", password="difference-engine"
        )

        assert user.email == "ada.lovelace@example.com"
        assert user.check_password("difference-engine")

    def test_create_user_defaults(self):
        """
        New accounts are unverified, without staff rights or two-factor.
        """

        user = User.objects.create_user(email="ada@example.com", name="Ada")

        assert user.is_verified is False
        assert user.is_staff is False
        assert user.is_superuser is False
        assert user.two_factor_enabled is False
        assert user.otp_code is None

    def test_create_user_without_password_is_unusable(self):
        user = User.objects.create_user(email="ada@example.com", name="Ada")

        assert user.has_usable_password() is False

    def test_create_user_requires_email(self):
        with pytest.raises(ValueError, match="The Email must be set"):
            User.objects.create_user(email="", name="Nobody", password="x")

    def test_create_superuser(self):
        admin = User.objects.create_superuser(
            email="admin@example.com", password="adminpass", name="Admin"
        )

        assert admin.is_staff
        assert admin.is_superuser
        assert admin.is_active
        assert admin.is_verified

    def test_create_superuser_rejects_non_staff(self):
        with pytest.raises(ValueError, match="is_staff=True"):
            User.objects.create_superuser(
                email="admin@example.com", password="adminpass", is_staff=False
            )

    def test_find_by_email_is_case_insensitive(self):
        user = User.objects.create_user(email="ada@example.com", name="Ada")

        assert User.objects.find_by_email(" ADA@example.com") == user
        assert User.objects.find_by_email("nobody@example.com") is None
