import pytest

from accounts.constants import Continuation, OTPPurpose
from accounts.exceptions import StepUpRequired
from accounts.gate import StepUpGate
from accounts.models import User
from accounts.tokens import VerificationContext, make_confirmation_token


@pytest.mark.django_db
class TestStepUpGate:
    def test_passes_without_two_factor(self, user_factory, mailoutbox):
        user = user_factory()

        StepUpGate.check(user)

        assert mailoutbox == []

    def test_requires_confirmation(self, user_factory, mailoutbox):
        user = user_factory(two_factor=True)

        with pytest.raises(StepUpRequired) as excinfo:
            StepUpGate.check(user)

        exc = excinfo.value
        assert exc.status_code == 403
        assert exc.next_step == Continuation.CONFIRM
        assert exc.address == user.email
        context = VerificationContext.load(exc.context, OTPPurpose.STEP_UP)
        assert context.address == user.email

        stored = User.objects.get(pk=user.pk)
        assert stored.otp_purpose == OTPPurpose.STEP_UP
        assert len(mailoutbox) == 1

    def test_pending_code_is_not_resent(self, user_factory, mailoutbox):
        user = user_factory(two_factor=True)
        with pytest.raises(StepUpRequired):
            StepUpGate.check(user)

        with pytest.raises(StepUpRequired):
            StepUpGate.check(user)

        assert len(mailoutbox) == 1

    def test_confirmation_token_passes_once(self, user_factory):
        user = user_factory(two_factor=True)
        token = make_confirmation_token(user)

        StepUpGate.check(user, confirmation_token=token)

        with pytest.raises(StepUpRequired):
            StepUpGate.check(user, confirmation_token=token)
