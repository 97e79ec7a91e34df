"""
One-time code services for account verification.

This module drives the lifecycle of the single code slot each account owns
(`User.otp_code`, `otp_expires_at`, `otp_purpose`): issuing, re-sending,
verifying and cancelling codes, with brute-force and re-send protection.

Features:
    - Generate secure numeric codes (`OTPService`).
    - Store one purpose-tagged code per account; a new code replaces the
      previous one whatever its purpose.
    - Enforce a re-send interval and a maximum number of wrong attempts.
    - Consume a matching code exactly once, even under concurrent requests,
      with a conditional UPDATE on the locked row.
    - Mark the account verified when a registration code is consumed.

Settings:
    ACCOUNTS_OTP_LENGTH (int): Digits per code (default: 6).
    ACCOUNTS_OTP_TTL (int): Code lifetime in seconds (default: 600).
    ACCOUNTS_OTP_RESEND_INTERVAL (int): Minimum seconds between sends (default: 60).
    ACCOUNTS_OTP_MAX_ATTEMPTS (int): Wrong submissions before the code is
        discarded (default: 5).

Example:
    >>> result = VerificationService.issue_code(user, OTPPurpose.REGISTRATION)
    >>> result.delivered
    True
    >>> VerificationService.verify_code(user, "042917", OTPPurpose.REGISTRATION)
    VerifyResult(user=<User: ada@example.com>, purpose='registration', ...)
"""

import logging
import secrets
import string
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import F
from django.utils import timezone

from .challenges import Verdict, attempts_remaining, judge, max_attempts, resend_wait
from .constants import VERIFIED_CONTINUATION, OTPPurpose
from .exceptions import CodeExpired, CodeMismatch, CodeNotFound, ResendTooSoon
from .notifications import OTPNotifier
from .utils import mask_email

logger = logging.getLogger(__name__)

User = get_user_model()

CLEARED_SLOT = {
    "otp_code": None,
    "otp_purpose": None,
    "otp_expires_at": None,
    "otp_attempts": 0,
}


@dataclass
class IssuedCode:
    code: str
    purpose: str
    expires_at: datetime


@dataclass
class IssueResult:
    """
    Outcome of issuing (or re-sending) a code.

    `delivered` is False when the notifier failed; the code is still stored.
    `already_verified` is True when a registration code was requested for
    an account that no longer needs one.
    """

    purpose: str
    expires_at: Optional[datetime] = None
    delivered: bool = False
    already_verified: bool = False


@dataclass
class VerifyResult:
    user: object
    purpose: str
    continuation: str
    already_verified: bool = False


class OTPService:
    """
    Generation of one-time codes.

    Methods:
        generate_code(length=None):
            Generate a secure numeric code.

        issue(purpose, ttl=None):
            Generate a code together with its expiry, without storing it.
    """

    @staticmethod
    def generate_code(length: Optional[int] = None) -> str:
        """
        Generate a secure numeric code.

        Uses Python's `secrets` module; every digit is drawn uniformly, so
        leading zeros are kept.

        Args:
            length (int, optional): Number of digits. Defaults to
                `ACCOUNTS_OTP_LENGTH`.

        Returns:
            str: The generated code.

        Example:
            >>> OTPService.generate_code()
            '049327'
        """

        length = length or settings.ACCOUNTS_OTP_LENGTH
        return "".join(secrets.choice(string.digits) for _ in range(length))

    @staticmethod
    def issue(purpose: str, ttl: Optional[int] = None) -> IssuedCode:
        """
        Generate a code for `purpose` that expires `ttl` seconds from now.
        """

        ttl = settings.ACCOUNTS_OTP_TTL if ttl is None else ttl
        return IssuedCode(
            code=OTPService.generate_code(),
            purpose=purpose,
            expires_at=timezone.now() + timedelta(seconds=ttl),
        )


class VerificationService:
    """
    Code lifecycle for stored accounts.

    Every state change happens inside `transaction.atomic()` on a row locked
    with `select_for_update()`; concurrent issues are last-writer-wins and
    concurrent verifications consume a code at most once.
    """

    @staticmethod
    def _load(pk):
        return User.objects.select_for_update().get(pk=pk)

    @staticmethod
    def _sync(user, values):
        for field, value in values.items():
            setattr(user, field, value)

    @classmethod
    def issue_code(cls, user, purpose, ttl=None, *, throttle=False) -> IssueResult:
        """
        Issue a new code for `purpose` and send it to the account's address.

        Any outstanding code is replaced and the attempt counter is reset.
        Sending happens after the row is written; a failed send is reported
        through `IssueResult.delivered` and never undoes the issue.

        Args:
            user (User): The account to issue for.
            purpose (str): An `OTPPurpose` value.
            ttl (int, optional): Lifetime in seconds.
            throttle (bool): Enforce the re-send interval.

        Raises:
            ResendTooSoon: If `throttle` is set and the last code was sent
                less than `ACCOUNTS_OTP_RESEND_INTERVAL` seconds ago.

        Returns:
            IssueResult: What was issued and whether it was delivered.
        """

        with transaction.atomic():
            locked = cls._load(user.pk)

            if purpose == OTPPurpose.REGISTRATION and locked.is_verified:
                return IssueResult(purpose=purpose, already_verified=True)

            now = timezone.now()
            if throttle:
                wait = resend_wait(locked.otp_last_sent_at, now)
                if wait:
                    raise ResendTooSoon(retry_after=wait)

            if locked.otp_code and locked.otp_purpose != purpose:
                logger.info(
                    "Replacing pending %s code for %s with a %s code",
                    locked.otp_purpose,
                    mask_email(locked.email),
                    purpose,
                )

            issued = OTPService.issue(purpose, ttl)
            values = {
                "otp_code": issued.code,
                "otp_purpose": purpose,
                "otp_expires_at": issued.expires_at,
                "otp_attempts": 0,
                "otp_last_sent_at": now,
            }
            User.objects.filter(pk=locked.pk).update(**values)

        cls._sync(user, values)
        logger.info("Issued %s code for %s", purpose, mask_email(user.email))

        delivered = OTPNotifier.send(user.email, purpose, issued.code)
        return IssueResult(
            purpose=purpose, expires_at=issued.expires_at, delivered=delivered
        )

    @classmethod
    def resend_code(cls, user, purpose) -> IssueResult:
        """Issue a fresh code, honouring the re-send interval."""

        return cls.issue_code(user, purpose, throttle=True)

    @classmethod
    def verify_code(cls, user, code, purpose) -> VerifyResult:
        """
        Check a submitted code and consume it on a match.

        Rules:
            - No code outstanding for `purpose`: `CodeNotFound`. A code that
              belongs to another purpose is left untouched.
            - Code past its expiry: the slot is cleared, then `CodeExpired`.
            - Wrong code: the attempt is counted, then `CodeMismatch`. The
              slot is cleared once `ACCOUNTS_OTP_MAX_ATTEMPTS` is reached.
            - Right code: the slot is cleared with a conditional UPDATE; if
              another request consumed it first, `CodeNotFound`.

        A registration code additionally marks the account verified.

        Returns:
            VerifyResult: The account and the continuation for `purpose`.
        """

        continuation = VERIFIED_CONTINUATION[purpose]
        error = None

        with transaction.atomic():
            locked = cls._load(user.pk)
            challenge = locked.pending_challenge

            if (
                purpose == OTPPurpose.REGISTRATION
                and locked.is_verified
                and (challenge is None or challenge.purpose != purpose)
            ):
                return VerifyResult(
                    user=locked,
                    purpose=purpose,
                    continuation=continuation,
                    already_verified=True,
                )

            verdict = judge(challenge, code, purpose)
            rows = User.objects.filter(pk=locked.pk)

            if verdict is Verdict.MISSING:
                error = CodeNotFound()

            elif verdict is Verdict.EXPIRED:
                rows.filter(otp_code=challenge.code).update(**CLEARED_SLOT)
                error = CodeExpired()

            elif verdict is Verdict.MISMATCH:
                # Counted in the database; the row read above may be stale.
                current = rows.filter(otp_code=challenge.code)
                current.update(otp_attempts=F("otp_attempts") + 1)
                counted = current.values_list("otp_attempts", flat=True).first()
                challenge.attempts = (
                    counted if counted is not None else challenge.attempts + 1
                )
                if challenge.attempts >= max_attempts():
                    current.filter(otp_attempts__gte=max_attempts()).update(
                        **CLEARED_SLOT
                    )
                error = CodeMismatch(attempts_remaining=attempts_remaining(challenge))

            else:
                values = dict(CLEARED_SLOT)
                if purpose == OTPPurpose.REGISTRATION:
                    values["is_verified"] = True

                consumed = rows.filter(
                    otp_code=challenge.code, otp_purpose=purpose
                ).update(**values)
                if not consumed:
                    error = CodeNotFound()

        # Raised outside the atomic block so the bookkeeping above is kept.
        if error is not None:
            logger.info(
                "Rejected %s code for %s: %s",
                purpose,
                mask_email(user.email),
                error.code,
            )
            raise error

        cls._sync(user, values)
        logger.info("Verified %s code for %s", purpose, mask_email(user.email))
        return VerifyResult(user=user, purpose=purpose, continuation=continuation)

    @classmethod
    def cancel_code(cls, user, purpose=None) -> bool:
        """
        Discard the outstanding code.

        With `purpose`, only a code issued for that purpose is discarded.
        Returns True if a code was discarded.
        """

        with transaction.atomic():
            locked = cls._load(user.pk)
            rows = User.objects.filter(pk=locked.pk, otp_code__isnull=False)
            if purpose is not None:
                rows = rows.filter(otp_purpose=purpose)
            cancelled = bool(rows.update(**CLEARED_SLOT))

        if cancelled:
            cls._sync(user, CLEARED_SLOT)
            logger.info("Cancelled pending code for %s", mask_email(user.email))
        return cancelled

    @staticmethod
    def has_pending_code(user, purpose) -> bool:
        challenge = user.pending_challenge
        return bool(
            challenge and challenge.purpose == purpose and not challenge.is_expired()
        )
