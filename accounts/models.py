"""
Custom user model for email-based authentication with one-time codes.

This module defines a Django `AbstractUser` subclass (`User`) that replaces
the default username-based authentication system. Users authenticate with
their **email** address, prove control of it with a one-time code, and may
turn on two-factor confirmation for sensitive account actions.

Features:
    - `email` is the unique login field, normalized on save.
    - A single display `name` replaces `first_name` / `last_name`.
    - One outstanding one-time code per account, tagged with the flow it
      belongs to (`otp_code`, `otp_expires_at`, `otp_purpose`).
    - A failed-attempt counter and a last-sent timestamp for throttling.
    - Two-factor flags (`two_factor_enabled`, `two_factor_confirmed_at`).

Example:
    >>> from accounts.models import User
    >>> user = User.objects.create_user(
    ...     email="Ada@Example.com", name="Ada Lovelace", password="difference-engine"
    ... )
    >>> user.email
    'ada@example.com'
    >>> user.has_two_factor
    False
"""

from django.contrib.auth.models import AbstractUser
from django.db import models
from django.utils.translation import gettext_lazy as _

from .challenges import Challenge
from .constants import OTPPurpose
from .managers import UserManager
from .utils import normalize_email_address


class User(AbstractUser):
    """
    Email-keyed account with a purpose-tagged one-time code slot.

    Attributes:
        email (str): Unique contact address, used as `USERNAME_FIELD`.
        name (str): Display name.
        is_verified (bool): Whether the address has been proven.
        otp_code (str): The outstanding code, or None.
        otp_expires_at (datetime): When the outstanding code stops being valid.
        otp_purpose (str): Which `OTPPurpose` the outstanding code belongs to.
        otp_attempts (int): Wrong submissions against the outstanding code.
        otp_last_sent_at (datetime): When a code was last issued.
        two_factor_enabled (bool): Whether the holder turned on 2FA.
        two_factor_confirmed_at (datetime): When 2FA was turned on.

    Manager:
        objects (UserManager): Handles user and superuser creation.
    """

    username = None
    first_name = None
    last_name = None

    email = models.EmailField(max_length=254, unique=True, verbose_name=_("email"))
    name = models.CharField(max_length=255, verbose_name=_("name"))
    is_verified = models.BooleanField(default=False, verbose_name=_("verified"))

    two_factor_enabled = models.BooleanField(
        default=False, verbose_name=_("two-factor enabled")
    )
    two_factor_confirmed_at = models.DateTimeField(
        blank=True, null=True, verbose_name=_("two-factor confirmed at")
    )

    otp_code = models.CharField(
        max_length=12, blank=True, null=True, verbose_name=_("one-time code")
    )
    otp_purpose = models.CharField(
        max_length=20,
        choices=OTPPurpose.choices,
        blank=True,
        null=True,
        verbose_name=_("one-time code purpose"),
    )
    otp_expires_at = models.DateTimeField(
        blank=True, null=True, verbose_name=_("one-time code expires at")
    )
    otp_attempts = models.PositiveSmallIntegerField(
        default=0, verbose_name=_("one-time code attempts")
    )
    otp_last_sent_at = models.DateTimeField(
        blank=True, null=True, verbose_name=_("one-time code last sent at")
    )

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["name"]

    objects = UserManager()

    def save(self, *args, **kwargs):
        """
        Normalize the email address, then save.
        """

        if self.email:
            self.email = normalize_email_address(self.email)

        super().save(*args, **kwargs)

    def __str__(self):
        return self.email

    def get_full_name(self):
        return self.name

    def get_short_name(self):
        return self.name

    @property
    def has_two_factor(self):
        """
        Whether two-factor confirmation is active.

        Both the flag and its confirmation timestamp must be set.
        """

        return bool(self.two_factor_enabled and self.two_factor_confirmed_at)

    @property
    def pending_challenge(self):
        """
        Return the outstanding code as a `Challenge`, or None.
        """

        if not self.otp_code:
            return None

        return Challenge(
            code=self.otp_code,
            purpose=self.otp_purpose,
            expires_at=self.otp_expires_at,
            attempts=self.otp_attempts,
            last_sent_at=self.otp_last_sent_at,
        )

    class Meta:
        db_table = "users"
        verbose_name = _("user")
        verbose_name_plural = _("users")
