"""
Unit tests for `RegistrationService`.

A registration is held in the cache until its code is verified; only a
verified registration creates a `User` row.
"""

from datetime import timedelta

import pytest
from django.core.cache import cache
from django.utils import timezone

from accounts.constants import OTPPurpose
from accounts.exceptions import CodeExpired, CodeMismatch, CodeNotFound, ResendTooSoon
from accounts.factories import DEFAULT_PASSWORD
from accounts.models import User
from accounts.registration import RegistrationService

EMAIL = "ada@example.com"


def start():
    return RegistrationService.start("Ada Lovelace", "  Ada@Example.com", DEFAULT_PASSWORD)


def pending_code(email=EMAIL):
    return RegistrationService.load(email).challenge.code


def age_pending(**changes):
    pending = RegistrationService.load(EMAIL)
    for field, value in changes.items():
        setattr(pending.challenge, field, value)
    RegistrationService._store(pending)


@pytest.mark.django_db
class TestStart:
    def test_stores_pending_and_sends_code(self, mailoutbox):
        result = start()

        pending = RegistrationService.load(EMAIL)
        assert result.delivered is True
        assert result.purpose == OTPPurpose.REGISTRATION
        assert pending.email == EMAIL
        assert pending.name == "Ada Lovelace"
        assert pending.password_hash != DEFAULT_PASSWORD
        assert RegistrationService.has_pending(EMAIL)
        assert not User.objects.filter(email=EMAIL).exists()

        assert mailoutbox[0].to == [EMAIL]
        assert pending.challenge.code in mailoutbox[0].body

    def test_restart_replaces_pending(self):
        start()
        age_pending(attempts=3, last_sent_at=timezone.now() - timedelta(minutes=5))

        RegistrationService.start("Ada King", EMAIL, DEFAULT_PASSWORD)

        pending = RegistrationService.load(EMAIL)
        assert pending.name == "Ada King"
        assert pending.challenge.attempts == 0
        assert pending.challenge.last_sent_at > timezone.now() - timedelta(minutes=1)

    def test_restart_too_soon(self):
        start()

        with pytest.raises(ResendTooSoon) as excinfo:
            RegistrationService.start("Ada King", EMAIL, DEFAULT_PASSWORD)

        assert excinfo.value.retry_after > 0
        assert RegistrationService.load(EMAIL).name == "Ada Lovelace"


@pytest.mark.django_db
class TestVerify:
    def test_match_creates_verified_account(self):
        start()

        result = RegistrationService.verify(EMAIL, pending_code())

        user = User.objects.get(email=EMAIL)
        assert result.user == user
        assert result.already_verified is False
        assert user.is_verified is True
        assert user.name == "Ada Lovelace"
        assert user.check_password(DEFAULT_PASSWORD)
        assert not RegistrationService.has_pending(EMAIL)

    def test_nothing_pending(self):
        with pytest.raises(CodeNotFound):
            RegistrationService.verify(EMAIL, "123456")

    def test_expired(self):
        start()
        code = pending_code()
        age_pending(expires_at=timezone.now() - timedelta(seconds=1))

        with pytest.raises(CodeExpired):
            RegistrationService.verify(EMAIL, code)

        assert not RegistrationService.has_pending(EMAIL)

    def test_mismatch_and_cap(self, settings):
        settings.ACCOUNTS_OTP_MAX_ATTEMPTS = 2
        start()
        code = pending_code()
        wrong = "9" * 6 if code != "999999" else "0" * 6

        with pytest.raises(CodeMismatch) as excinfo:
            RegistrationService.verify(EMAIL, wrong)
        assert excinfo.value.attempts_remaining == 1
        assert RegistrationService.load(EMAIL).challenge.attempts == 1

        with pytest.raises(CodeMismatch) as excinfo:
            RegistrationService.verify(EMAIL, wrong)
        assert excinfo.value.attempts_remaining == 0

        with pytest.raises(CodeNotFound):
            RegistrationService.verify(EMAIL, code)
        assert not User.objects.filter(email=EMAIL).exists()

    def test_second_submission_is_already_verified(self):
        start()
        code = pending_code()
        RegistrationService.verify(EMAIL, code)

        result = RegistrationService.verify(EMAIL, code)

        assert result.already_verified is True
        assert User.objects.filter(email=EMAIL).count() == 1

    def test_lost_delete_race(self, mocker):
        """
        Only the request that removed the pending entry creates the account.
        """

        start()
        code = pending_code()
        mocker.patch.object(cache, "delete", return_value=False)

        with pytest.raises(CodeNotFound):
            RegistrationService.verify(EMAIL, code)

        assert not User.objects.filter(email=EMAIL).exists()

    @pytest.mark.parametrize("cap", [1, 5])
    def test_wrong_code_read_before_resend(self, cap, mailoutbox, mocker, settings):
        """
        A wrong code judged against the entry a resend has since replaced
        neither restores the old code nor discards the new one.
        """

        settings.ACCOUNTS_OTP_MAX_ATTEMPTS = cap
        start()
        snapshot = RegistrationService.load(EMAIL)
        age_pending(last_sent_at=timezone.now() - timedelta(minutes=5))
        RegistrationService.resend(EMAIL)
        fresh = pending_code()
        assert fresh in mailoutbox[1].body
        wrong = next(
            digit * 6
            for digit in "0123"
            if digit * 6 not in (snapshot.challenge.code, fresh)
        )

        snapshots = [snapshot]
        load = RegistrationService.load
        mocker.patch.object(
            RegistrationService,
            "load",
            side_effect=lambda email: snapshots.pop() if snapshots else load(email),
        )

        with pytest.raises(CodeMismatch):
            RegistrationService.verify(EMAIL, wrong)

        mocker.stopall()
        assert pending_code() == fresh
        assert RegistrationService.load(EMAIL).challenge.attempts == 0
        RegistrationService.verify(EMAIL, fresh)
        assert User.objects.get(email=EMAIL).is_verified


@pytest.mark.django_db
class TestResendAndCancel:
    def test_resend_too_soon(self):
        start()

        with pytest.raises(ResendTooSoon) as excinfo:
            RegistrationService.resend(EMAIL)

        assert excinfo.value.retry_after > 0

    def test_resend_after_interval(self, mailoutbox):
        start()
        age_pending(last_sent_at=timezone.now() - timedelta(minutes=5))

        result = RegistrationService.resend(EMAIL)

        assert result.delivered is True
        assert len(mailoutbox) == 2
        assert pending_code() in mailoutbox[1].body

    def test_resend_without_pending(self):
        with pytest.raises(CodeNotFound):
            RegistrationService.resend(EMAIL)

    def test_resend_for_existing_account(self, user_factory):
        user_factory(email=EMAIL)

        assert RegistrationService.resend(EMAIL).already_verified is True

    def test_cancel(self):
        start()

        RegistrationService.cancel(EMAIL)

        assert not RegistrationService.has_pending(EMAIL)
        with pytest.raises(CodeNotFound):
            RegistrationService.verify(EMAIL, "123456")
