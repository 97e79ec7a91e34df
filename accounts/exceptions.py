"""
Domain errors raised by the accounts services.

Services raise these plain exceptions; `accounts.boundary.exception_handler`
turns them into HTTP responses (JSON for API clients, redirects for
browsers). Each class carries the status and machine-readable `code` it is
rendered with.
"""

from django.utils.translation import gettext_lazy as _
from rest_framework import status


class AccountsError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = _("Request could not be completed.")
    default_code = "error"

    def __init__(self, detail=None):
        self.detail = detail if detail is not None else self.default_detail
        super().__init__(str(self.detail))

    @property
    def code(self):
        return self.default_code

    def payload(self):
        return {"detail": self.detail, "code": self.code}


class AccountNotFound(AccountsError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = _("No account is registered with this email address.")
    default_code = "account_not_found"


class OTPError(AccountsError):
    """Base class for one-time code failures."""


class CodeNotFound(OTPError):
    default_detail = _("No verification code is pending. Request a new one.")
    default_code = "not_found"


class CodeExpired(OTPError):
    default_detail = _("The verification code has expired. Request a new one.")
    default_code = "expired"


class CodeMismatch(OTPError):
    default_detail = _("The verification code is incorrect.")
    default_code = "mismatch"

    def __init__(self, attempts_remaining, detail=None):
        self.attempts_remaining = attempts_remaining
        super().__init__(detail)

    def payload(self):
        data = super().payload()
        data["attempts_remaining"] = self.attempts_remaining
        return data


class ResendTooSoon(OTPError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_detail = _("Please wait before requesting another code.")
    default_code = "too_soon"

    def __init__(self, retry_after, detail=None):
        self.retry_after = retry_after
        super().__init__(detail)

    def payload(self):
        data = super().payload()
        data["retry_after"] = self.retry_after
        return data


class AuthenticationRequired(AccountsError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = _("Authentication credentials were not provided.")
    default_code = "authentication_required"


class VerificationRequired(AccountsError):
    """
    The caller must prove control of its address before continuing.

    Carries the address and the signed context the verification screen (or
    API client) needs to finish the flow.
    """

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = _("Verify your email address to continue.")
    default_code = "verification_required"

    def __init__(self, address, context, next_step, detail=None):
        self.address = address
        self.context = context
        self.next_step = next_step
        super().__init__(detail)

    def payload(self):
        data = super().payload()
        data.update(
            {"address": self.address, "next": self.next_step, "context": self.context}
        )
        return data


class StepUpRequired(VerificationRequired):
    default_detail = _("Confirm this action with the code sent to your email.")
    default_code = "step_up_required"
