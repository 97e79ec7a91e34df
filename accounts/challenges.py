"""
Rules shared by every place a one-time code is stored.

A code can live on an account row (`User.otp_*` columns) or inside a pending
registration in the cache. Both stores judge submissions and throttle
resends with the same functions, so the behaviour is identical whichever
store holds the code.
"""

import enum
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Optional

from django.conf import settings
from django.utils import timezone
from django.utils.crypto import constant_time_compare


class Verdict(enum.Enum):
    MATCH = "match"
    MISSING = "missing"
    EXPIRED = "expired"
    MISMATCH = "mismatch"


@dataclass
class Challenge:
    """
    A code that is waiting to be submitted.

    Attributes:
        code (str): The digits that were sent.
        purpose (str): The `OTPPurpose` the code belongs to.
        expires_at (datetime): End of the validity window.
        attempts (int): Wrong submissions so far.
        last_sent_at (datetime): When the code was issued.
    """

    code: str
    purpose: str
    expires_at: datetime
    attempts: int = 0
    last_sent_at: Optional[datetime] = None

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        now = now or timezone.now()
        return now > self.expires_at

    def to_dict(self) -> dict:
        return asdict(self)


def max_attempts() -> int:
    return settings.ACCOUNTS_OTP_MAX_ATTEMPTS


def attempts_remaining(challenge: Challenge) -> int:
    return max(max_attempts() - challenge.attempts, 0)


def judge(
    challenge: Optional[Challenge],
    submitted: str,
    purpose: str,
    now: Optional[datetime] = None,
) -> Verdict:
    """
    Decide what a submitted code means against the stored challenge.

    A challenge that belongs to a different purpose is reported as MISSING
    and must be left untouched by the caller.

    Args:
        challenge (Challenge | None): What is stored, if anything.
        submitted (str): The code the caller typed.
        purpose (str): The flow the caller is completing.
        now (datetime, optional): Reference time. Defaults to `timezone.now()`.

    Returns:
        Verdict: MATCH, MISSING, EXPIRED or MISMATCH.
    """

    if challenge is None or not challenge.code or challenge.purpose != purpose:
        return Verdict.MISSING

    if challenge.is_expired(now):
        return Verdict.EXPIRED

    if not constant_time_compare(challenge.code, str(submitted)):
        return Verdict.MISMATCH

    return Verdict.MATCH


def resend_wait(last_sent_at: Optional[datetime], now: Optional[datetime] = None) -> int:
    """
    Seconds the caller must still wait before another code may be sent.

    Returns 0 when a resend is allowed.
    """

    if last_sent_at is None:
        return 0

    now = now or timezone.now()
    elapsed = (now - last_sent_at).total_seconds()
    remaining = settings.ACCOUNTS_OTP_RESEND_INTERVAL - elapsed
    if remaining <= 0:
        return 0
    # Round up so a client that honours Retry-After is never early.
    return int(remaining) + (1 if remaining % 1 else 0)
