"""
Second-factor confirmation for sensitive account actions.

Password changes, turning two-factor off and deleting the account go
through `StepUpGate.check` after the current password has been validated.
Accounts without two-factor pass straight through. Accounts with it must
present a confirmation token obtained from ``POST /api/auth/confirm/``;
otherwise a step-up code is sent and `StepUpRequired` is raised.
"""

import logging

from .constants import Continuation, OTPPurpose
from .exceptions import StepUpRequired
from .services import VerificationService
from .tokens import VerificationContext, consume_confirmation_token
from .utils import mask_email

logger = logging.getLogger(__name__)


class StepUpGate:
    @staticmethod
    def check(user, confirmation_token=None):
        """
        Let the action proceed or raise `StepUpRequired`.

        Args:
            user (User): The authenticated account.
            confirmation_token (str, optional): Token from the confirm step.

        Raises:
            StepUpRequired: Two-factor is on and no unused, unexpired
                confirmation token was supplied.
        """

        if not user.has_two_factor:
            return

        if confirmation_token and consume_confirmation_token(user, confirmation_token):
            return

        if not VerificationService.has_pending_code(user, OTPPurpose.STEP_UP):
            VerificationService.issue_code(user, OTPPurpose.STEP_UP)

        logger.info("Step-up confirmation required for %s", mask_email(user.email))
        raise StepUpRequired(
            address=user.email,
            context=VerificationContext(user.email, OTPPurpose.STEP_UP).sign(),
            next_step=Continuation.CONFIRM,
        )
