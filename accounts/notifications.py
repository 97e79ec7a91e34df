"""
Outbound delivery of one-time codes.

`OTPNotifier.send` mails a code to an address using Django's configured
email backend. Delivery is fire-and-forget: a transport failure is logged
and reported as ``False`` so that issuing a code never fails because the
mail server is down.

Example:
    >>> OTPNotifier.send("ada@example.com", OTPPurpose.REGISTRATION, "042917")
    True
"""

import logging

from django.conf import settings
from django.core.mail import send_mail
from django.utils.translation import gettext as _

from .constants import OTPPurpose
from .utils import mask_email

logger = logging.getLogger(__name__)

SUBJECTS = {
    OTPPurpose.REGISTRATION: "Verify your email address",
    OTPPurpose.LOGIN_2FA: "Your sign-in code",
    OTPPurpose.PASSWORD_RESET: "Reset your password",
    OTPPurpose.STEP_UP: "Confirm your account change",
}


class OTPNotifier:
    """
    Sends verification codes by email.
    """

    @staticmethod
    def build_message(purpose, code):
        minutes = max(settings.ACCOUNTS_OTP_TTL // 60, 1)
        return _(
            "Your verification code is: %(code)s\n\n"
            "This code will expire in %(minutes)d minutes.\n"
            "If you didn't request this code, please ignore this email."
        ) % {"code": code, "minutes": minutes}

    @staticmethod
    def send(address: str, purpose: str, code: str) -> bool:
        """
        Deliver `code` to `address`.

        Args:
            address (str): Recipient email address.
            purpose (str): The `OTPPurpose` the code was issued for.
            code (str): The digits to deliver.

        Returns:
            bool: True if the backend accepted the message, False otherwise.
        """

        subject = SUBJECTS.get(purpose, "Your verification code")

        try:
            send_mail(
                subject=_(subject),
                message=OTPNotifier.build_message(purpose, code),
                from_email=settings.DEFAULT_FROM_EMAIL,
                recipient_list=[address],
                fail_silently=False,
            )
        except Exception:
            logger.exception(
                "Failed to deliver %s code to %s", purpose, mask_email(address)
            )
            return False

        logger.info("Sent %s code to %s", purpose, mask_email(address))
        return True
