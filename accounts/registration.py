"""
Sign-ups that have not proven their email address yet.

A pending registration lives in the Django cache under
``registration:<email>`` until its code is verified; only then is a `User`
row created. The code on a pending registration follows the same rules as
a code on an account (see `accounts.challenges`).
"""

import logging
from dataclasses import dataclass
from typing import Optional

from django.conf import settings
from django.contrib.auth import get_user_model
from django.contrib.auth.hashers import make_password
from django.core.cache import cache
from django.db import IntegrityError, transaction
from django.utils import timezone

from .challenges import Challenge, Verdict, attempts_remaining, judge, max_attempts, resend_wait
from .constants import VERIFIED_CONTINUATION, OTPPurpose
from .exceptions import CodeExpired, CodeMismatch, CodeNotFound, ResendTooSoon
from .notifications import OTPNotifier
from .services import IssueResult, OTPService, VerifyResult
from .utils import mask_email, normalize_email_address

logger = logging.getLogger(__name__)

User = get_user_model()


@dataclass
class PendingRegistration:
    name: str
    email: str
    password_hash: str
    challenge: Challenge

    def to_dict(self):
        return {
            "name": self.name,
            "email": self.email,
            "password_hash": self.password_hash,
            "challenge": self.challenge.to_dict(),
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            name=data["name"],
            email=data["email"],
            password_hash=data["password_hash"],
            challenge=Challenge(**data["challenge"]),
        )


class RegistrationService:
    """
    Start, verify, re-send and cancel pending registrations.

    Methods:
        start(name, email, password):
            Store a pending registration and send its code.

        verify(email, code):
            Check the code; on a match create the verified account.

        resend(email):
            Send a fresh code, honouring the re-send interval.

        cancel(email):
            Drop the pending registration.
    """

    continuation = VERIFIED_CONTINUATION[OTPPurpose.REGISTRATION]

    @staticmethod
    def cache_key(email):
        return f"registration:{normalize_email_address(email)}"

    @staticmethod
    def attempts_key(email, code):
        return f"registration-attempts:{normalize_email_address(email)}:{code}"

    @classmethod
    def load(cls, email) -> Optional[PendingRegistration]:
        data = cache.get(cls.cache_key(email))
        if not data:
            return None

        pending = PendingRegistration.from_dict(data)
        pending.challenge.attempts = cache.get(
            cls.attempts_key(email, pending.challenge.code), 0
        )
        return pending

    @classmethod
    def _count_attempt(cls, email, code):
        """
        Add one wrong submission for `code` and return the new total.

        The count lives under its own key, so a wrong submission never
        rewrites the pending entry a concurrent resend may have replaced.
        """

        key = cls.attempts_key(email, code)
        timeout = settings.ACCOUNTS_REGISTRATION_PENDING_TTL
        cache.add(key, 0, timeout=timeout)
        try:
            return cache.incr(key)
        except ValueError:
            # Evicted between add and incr.
            cache.add(key, 1, timeout=timeout)
            return 1

    @classmethod
    def _discard(cls, email, code):
        """Drop the pending entry only while it still holds `code`."""

        current = cls.load(email)
        if current is not None and current.challenge.code == code:
            cache.delete(cls.cache_key(email))
        cache.delete(cls.attempts_key(email, code))

    @classmethod
    def _store(cls, pending):
        cache.set(
            cls.cache_key(pending.email),
            pending.to_dict(),
            timeout=settings.ACCOUNTS_REGISTRATION_PENDING_TTL,
        )

    @classmethod
    def _send(cls, pending, now):
        issued = OTPService.issue(OTPPurpose.REGISTRATION)
        cache.delete(cls.attempts_key(pending.email, issued.code))
        pending.challenge = Challenge(
            code=issued.code,
            purpose=issued.purpose,
            expires_at=issued.expires_at,
            attempts=0,
            last_sent_at=now,
        )
        cls._store(pending)
        logger.info("Issued registration code for %s", mask_email(pending.email))

        delivered = OTPNotifier.send(pending.email, OTPPurpose.REGISTRATION, issued.code)
        return IssueResult(
            purpose=OTPPurpose.REGISTRATION,
            expires_at=issued.expires_at,
            delivered=delivered,
        )

    @classmethod
    def start(cls, name, email, password) -> IssueResult:
        """
        Begin a registration. A previous pending entry for `email` is replaced.

        Raises:
            ResendTooSoon: If a live code for `email` was sent less than
                `ACCOUNTS_OTP_RESEND_INTERVAL` seconds ago.
        """

        now = timezone.now()
        previous = cls.load(email)
        if previous is not None and not previous.challenge.is_expired(now):
            wait = resend_wait(previous.challenge.last_sent_at, now)
            if wait:
                raise ResendTooSoon(retry_after=wait)

        pending = PendingRegistration(
            name=name,
            email=normalize_email_address(email),
            password_hash=make_password(password),
            challenge=None,
        )
        return cls._send(pending, now)

    @classmethod
    def resend(cls, email) -> IssueResult:
        """
        Raises:
            CodeNotFound: If there is no pending registration for `email`.
            ResendTooSoon: If the last code was sent too recently.
        """

        if User.objects.filter(email=normalize_email_address(email)).exists():
            return IssueResult(purpose=OTPPurpose.REGISTRATION, already_verified=True)

        pending = cls.load(email)
        if pending is None:
            raise CodeNotFound()

        now = timezone.now()
        wait = resend_wait(pending.challenge.last_sent_at, now)
        if wait:
            raise ResendTooSoon(retry_after=wait)

        return cls._send(pending, now)

    @classmethod
    def verify(cls, email, code) -> VerifyResult:
        """
        Check `code` against the pending registration for `email`.

        On a match the cache entry is deleted first; only the request whose
        delete succeeded creates the account, so two concurrent submissions
        of the right code create one account.
        """

        email = normalize_email_address(email)
        existing = User.objects.find_by_email(email)
        if existing is not None and existing.is_verified:
            return VerifyResult(
                user=existing,
                purpose=OTPPurpose.REGISTRATION,
                continuation=cls.continuation,
                already_verified=True,
            )

        key = cls.cache_key(email)
        pending = cls.load(email)
        challenge = pending.challenge if pending else None
        verdict = judge(challenge, code, OTPPurpose.REGISTRATION)

        if verdict is Verdict.MISSING:
            raise CodeNotFound()

        if verdict is Verdict.EXPIRED:
            cls._discard(email, challenge.code)
            raise CodeExpired()

        if verdict is Verdict.MISMATCH:
            challenge.attempts = cls._count_attempt(email, challenge.code)
            if challenge.attempts >= max_attempts():
                cls._discard(email, challenge.code)
            logger.info("Rejected registration code for %s", mask_email(email))
            raise CodeMismatch(attempts_remaining=attempts_remaining(challenge))

        if not cache.delete(key):
            raise CodeNotFound()
        cache.delete(cls.attempts_key(email, challenge.code))

        try:
            with transaction.atomic():
                user = User(email=email, name=pending.name, is_verified=True)
                user.password = pending.password_hash
                user.save()
        except IntegrityError:
            logger.info("Registration for %s already completed", mask_email(email))
            return VerifyResult(
                user=User.objects.find_by_email(email),
                purpose=OTPPurpose.REGISTRATION,
                continuation=cls.continuation,
                already_verified=True,
            )

        logger.info("Registered %s", mask_email(email))
        return VerifyResult(
            user=user, purpose=OTPPurpose.REGISTRATION, continuation=cls.continuation
        )

    @classmethod
    def cancel(cls, email):
        cache.delete(cls.cache_key(email))
        logger.info("Cancelled registration for %s", mask_email(email))

    @classmethod
    def has_pending(cls, email) -> bool:
        return cache.get(cls.cache_key(email)) is not None
