"""
Access rules for capabilities that need a proven email address.
"""

from rest_framework.permissions import BasePermission

from .constants import Continuation, OTPPurpose
from .exceptions import AuthenticationRequired, VerificationRequired
from .tokens import VerificationContext


class IsVerifiedAccount(BasePermission):
    """
    Allow authenticated accounts whose address has been verified.

    Instead of returning False this raises the boundary signals, so the
    caller learns *why* it was refused:
        - not logged in: `AuthenticationRequired`
        - logged in but unverified: `VerificationRequired`, with a context
          for ``POST /api/auth/register/verify/``.
    """

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            raise AuthenticationRequired()

        if not user.is_verified:
            raise VerificationRequired(
                address=user.email,
                context=VerificationContext(user.email, OTPPurpose.REGISTRATION).sign(),
                next_step=Continuation.VERIFY_REGISTRATION,
            )

        return True
