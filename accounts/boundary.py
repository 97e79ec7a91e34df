"""
DRF exception handler that renders account errors for the right caller.

Configured as ``REST_FRAMEWORK["EXCEPTION_HANDLER"]``. Browsers (see
`accounts.middleware.CallerKindMiddleware`) are redirected to the login or
verification screen; API clients get a status code and a JSON body with a
machine-readable ``code``. Anything that is not an account error is left
to DRF's default handler.
"""

import logging
from urllib.parse import urlencode

from django.conf import settings
from django.http import HttpResponseRedirect
from rest_framework import exceptions
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from .constants import CallerKind
from .exceptions import (
    AccountsError,
    AuthenticationRequired,
    ResendTooSoon,
    StepUpRequired,
    VerificationRequired,
)

logger = logging.getLogger(__name__)


def caller_kind(request):
    return getattr(request, "caller_kind", CallerKind.PROGRAMMATIC)


def redirect_url(exc, request):
    """Where an interactive caller is sent for a boundary signal, or None."""

    if isinstance(exc, AuthenticationRequired):
        query = urlencode({"next": request.get_full_path()})
        return f"{settings.LOGIN_URL}?{query}"

    if isinstance(exc, VerificationRequired):
        screen = (
            settings.ACCOUNTS_CONFIRMATION_URL
            if isinstance(exc, StepUpRequired)
            else settings.ACCOUNTS_VERIFICATION_URL
        )
        query = urlencode({"context": exc.context, "next": request.get_full_path()})
        return f"{screen}?{query}"

    return None


def render_accounts_error(exc, request, authenticate_header=None):
    if request is not None and caller_kind(request) == CallerKind.INTERACTIVE:
        url = redirect_url(exc, request)
        if url:
            return HttpResponseRedirect(url)

    headers = {}
    if isinstance(exc, ResendTooSoon):
        headers["Retry-After"] = str(exc.retry_after)
    if isinstance(exc, AuthenticationRequired) and authenticate_header:
        headers["WWW-Authenticate"] = authenticate_header

    return Response(exc.payload(), status=exc.status_code, headers=headers)


def exception_handler(exc, context):
    """
    Render `AccountsError` subclasses; delegate everything else to DRF.

    DRF's `NotAuthenticated` is treated as `AuthenticationRequired` so that
    unauthenticated browsers are redirected to the login screen as well.
    """

    request = context.get("request")
    view = context.get("view")

    if isinstance(exc, exceptions.NotAuthenticated):
        exc = AuthenticationRequired()

    authenticate_header = None
    if isinstance(exc, AuthenticationRequired) and view is not None:
        authenticate_header = view.get_authenticate_header(request)

    if isinstance(exc, AccountsError):
        logger.debug(
            "Rendering %s for %s caller", exc.code, caller_kind(request)
        )
        return render_accounts_error(exc, request, authenticate_header)

    return drf_exception_handler(exc, context)
