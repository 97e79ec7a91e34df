"""
Enumerations shared by the account verification flows.

This module defines the purposes a one-time code can be issued for, the
continuation each successful verification hands back to the caller, and
the two kinds of caller the request boundary distinguishes.

By using Django's `models.TextChoices`, we ensure:
- Readable values in the database (`User.otp_purpose`) and in API payloads.
- Enforced consistency (only predefined choices are accepted by serializers).
- Easy integration with the admin panel.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class OTPPurpose(models.TextChoices):
    """
    The flow an outstanding one-time code is bound to.

    A code issued for one purpose can never be consumed by another flow.

    Attributes:
        REGISTRATION (str): Proves control of the address during sign-up.
        LOGIN_2FA (str): Second step of a login for accounts with 2FA on.
        PASSWORD_RESET (str): Unlocks a one-time password change.
        STEP_UP (str): Confirms a sensitive action on an authenticated account.
    """

    REGISTRATION = "registration", _("Registration")
    LOGIN_2FA = "login_2fa", _("Login two-factor")
    PASSWORD_RESET = "password_reset", _("Password reset")
    STEP_UP = "step_up", _("Step-up confirmation")


class Continuation(models.TextChoices):
    """
    What the caller should do next after a flow step succeeds.
    """

    VERIFY_REGISTRATION = "verify_registration", _("Verify registration")
    TWO_FACTOR_CHALLENGE = "two_factor_challenge", _("Two-factor challenge")
    VERIFY_PASSWORD_RESET = "verify_password_reset", _("Verify password reset")
    SESSION_ESTABLISHED = "session_established", _("Session established")
    SET_PASSWORD = "set_password", _("Set new password")
    CONFIRMED = "confirmed", _("Confirmed")
    CONFIRM = "confirm", _("Confirm with code")
    LOGIN = "login", _("Log in")


#: Continuation handed back after a successful verification, per purpose.
VERIFIED_CONTINUATION = {
    OTPPurpose.REGISTRATION: Continuation.SESSION_ESTABLISHED,
    OTPPurpose.LOGIN_2FA: Continuation.SESSION_ESTABLISHED,
    OTPPurpose.PASSWORD_RESET: Continuation.SET_PASSWORD,
    OTPPurpose.STEP_UP: Continuation.CONFIRMED,
}


class CallerKind(models.TextChoices):
    """
    How a caller consumes responses.

    Attributes:
        INTERACTIVE (str): A browser navigating pages; gets redirects.
        PROGRAMMATIC (str): An API client; gets status codes and JSON.
    """

    INTERACTIVE = "interactive", _("Interactive")
    PROGRAMMATIC = "programmatic", _("Programmatic")
