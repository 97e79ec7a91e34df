"""
Signed tokens passed between the steps of a verification flow.

- `VerificationContext`: which address and purpose a flow is about. Handed
  out by the start step and sent back on verify / resend, so no server-side
  session state is needed between steps.
- Password reset token: proof that a reset code was verified. Bound to the
  current password hash, so it stops working once the password changes.
- Confirmation token: proof that a step-up code was verified. Usable once,
  within `ACCOUNTS_STEP_UP_WINDOW` seconds.

All tokens use `django.core.signing` with a per-kind salt.
"""

import secrets
from dataclasses import dataclass, field
from typing import Optional

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core import signing
from django.core.cache import cache
from django.utils import timezone
from django.utils.crypto import constant_time_compare, salted_hmac

from .utils import normalize_email_address

User = get_user_model()

CONTEXT_SALT = "accounts.verification-context"
RESET_SALT = "accounts.password-reset"
CONFIRMATION_SALT = "accounts.step-up-confirmation"


class InvalidToken(Exception):
    """A token was tampered with, expired, used up or meant for another flow."""


@dataclass
class VerificationContext:
    address: str
    purpose: str
    issued_at: int = field(default_factory=lambda: int(timezone.now().timestamp()))

    def sign(self) -> str:
        return signing.dumps(
            {"a": self.address, "p": str(self.purpose), "t": self.issued_at},
            salt=CONTEXT_SALT,
            compress=True,
        )

    @classmethod
    def load(cls, token: str, purpose: Optional[str] = None) -> "VerificationContext":
        """
        Decode a signed context.

        Raises:
            InvalidToken: If the signature is bad, the context is older than
                `ACCOUNTS_CONTEXT_MAX_AGE`, or it belongs to another purpose.
        """

        try:
            data = signing.loads(
                token, salt=CONTEXT_SALT, max_age=settings.ACCOUNTS_CONTEXT_MAX_AGE
            )
        except signing.BadSignature as exc:
            raise InvalidToken("Verification context is invalid or has expired.") from exc

        context = cls(
            address=normalize_email_address(data["a"]),
            purpose=data["p"],
            issued_at=data["t"],
        )
        if purpose is not None and context.purpose != purpose:
            raise InvalidToken("Verification context belongs to another flow.")
        return context


def _password_fingerprint(user):
    return salted_hmac(RESET_SALT, user.password).hexdigest()


def make_reset_token(user) -> str:
    return signing.dumps(
        {"u": user.pk, "h": _password_fingerprint(user)}, salt=RESET_SALT
    )


def check_reset_token(token: str):
    """
    Return the user a reset token was issued to.

    Raises:
        InvalidToken: If the token is bad, older than
            `ACCOUNTS_PASSWORD_RESET_MAX_AGE`, or the password already changed.
    """

    try:
        data = signing.loads(
            token, salt=RESET_SALT, max_age=settings.ACCOUNTS_PASSWORD_RESET_MAX_AGE
        )
    except signing.BadSignature as exc:
        raise InvalidToken("Reset token is invalid or has expired.") from exc

    user = User.objects.filter(pk=data["u"]).first()
    if user is None or not constant_time_compare(data["h"], _password_fingerprint(user)):
        raise InvalidToken("Reset token is invalid or has expired.")
    return user


def make_confirmation_token(user) -> str:
    return signing.dumps(
        {"u": user.pk, "n": secrets.token_urlsafe(16)}, salt=CONFIRMATION_SALT
    )


def consume_confirmation_token(user, token: str) -> bool:
    """
    Spend a confirmation token for `user`.

    Returns False if the token is bad, expired, issued to someone else or
    was already spent.
    """

    window = settings.ACCOUNTS_STEP_UP_WINDOW
    try:
        data = signing.loads(token, salt=CONFIRMATION_SALT, max_age=window)
    except signing.BadSignature:
        return False

    if data.get("u") != user.pk:
        return False

    # cache.add only stores the nonce if it is not there yet.
    return cache.add(f"step-up-used:{data['n']}", True, timeout=window)
