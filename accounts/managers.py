"""
Custom user manager for email-keyed accounts.

This module provides a `BaseUserManager` implementation (`UserManager`) for
the `User` model, which authenticates with an email address instead of a
username.

Features:
    - Email is required and normalized with `normalize_email_address`.
    - Passwords are hashed with Django's configured hasher.
    - Accounts start unverified unless `is_verified=True` is passed.
    - Superusers are always active, staff and verified.

Example:
    >>> from accounts.models import User
    >>> user = User.objects.create_user(
    ...     email="Ada@Example.com", name="Ada", password="difference-engine"
    ... )
    >>> user.email
    'ada@example.com'
    >>> user.is_verified
    False
"""

from django.contrib.auth.models import BaseUserManager
from django.utils.translation import gettext_lazy as _

from .utils import normalize_email_address


class UserManager(BaseUserManager):
    """
    Manager handling creation of regular users and superusers.

    Methods:
        create_user(email, password=None, **extra_fields):
            Creates and saves a regular user.

        create_superuser(email, password, **extra_fields):
            Creates and saves a verified staff superuser.

        find_by_email(email):
            Returns the user owning `email`, or None.
    """

    use_in_migrations = True

    def create_user(self, email, password=None, **extra_fields):
        """
        Create and return a new user.

        Args:
            email (str): The account's contact address.
            password (str, optional): Raw password. If None, the account is
                created with an unusable password.
            **extra_fields: Additional model fields (e.g. `name`,
                `is_verified`).

        Raises:
            ValueError: If `email` is empty.

        Returns:
            User: The created user instance.
        """

        if not email:
            raise ValueError(_("The Email must be set"))

        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)

        user = self.model(email=normalize_email_address(email), **extra_fields)

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.save(using=self._db)
        return user

    def create_superuser(self, email, password, **extra_fields):
        """
        Create and return a new superuser.

        Raises:
            ValueError: If `is_staff` or `is_superuser` is not True.
        """

        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("is_active", True)
        extra_fields.setdefault("is_verified", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError(_("Superuser must have is_staff=True."))
        if extra_fields.get("is_superuser") is not True:
            raise ValueError(_("Superuser must have is_superuser=True."))

        return self.create_user(email, password, **extra_fields)

    def find_by_email(self, email):
        """Return the user registered with `email`, or None."""

        return self.filter(email=normalize_email_address(email)).first()
