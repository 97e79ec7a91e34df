"""
Tests for caller classification and the error boundary.

Browsers are redirected to the login or verification screen; API clients
get a status code with a JSON body.
"""

from urllib.parse import parse_qs, urlparse

import pytest
from django.test import RequestFactory
from django.urls import reverse
from rest_framework import exceptions, status

from accounts.boundary import exception_handler
from accounts.constants import CallerKind, Continuation, OTPPurpose
from accounts.exceptions import CodeMismatch, ResendTooSoon
from accounts.middleware import resolve_caller_kind
from accounts.tokens import VerificationContext


@pytest.mark.parametrize(
    "headers, expected",
    [
        ({}, CallerKind.PROGRAMMATIC),
        ({"HTTP_ACCEPT": "application/json"}, CallerKind.PROGRAMMATIC),
        ({"HTTP_ACCEPT": "text/html,application/xhtml+xml"}, CallerKind.INTERACTIVE),
        (
            {"HTTP_ACCEPT": "text/html", "HTTP_X_REQUESTED_WITH": "XMLHttpRequest"},
            CallerKind.PROGRAMMATIC,
        ),
        (
            {"HTTP_ACCEPT": "text/html", "HTTP_X_RESPONSE_FORMAT": "json"},
            CallerKind.PROGRAMMATIC,
        ),
        ({"HTTP_X_RESPONSE_FORMAT": "HTML"}, CallerKind.INTERACTIVE),
    ],
)
def test_resolve_caller_kind(headers, expected):
    request = RequestFactory().get("/", **headers)

    assert resolve_caller_kind(request) == expected


class TestExceptionHandler:
    def handle(self, exc, kind=CallerKind.PROGRAMMATIC):
        request = RequestFactory().get("/api/profile/me/")
        request.caller_kind = kind
        return exception_handler(exc, {"request": request})

    def test_retry_after_header(self):
        response = self.handle(ResendTooSoon(retry_after=42))

        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
        assert response["Retry-After"] == "42"
        assert response.data["code"] == "too_soon"
        assert response.data["retry_after"] == 42

    def test_code_errors_are_json_for_browsers_too(self):
        response = self.handle(CodeMismatch(attempts_remaining=2), CallerKind.INTERACTIVE)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {
            "detail": CodeMismatch.default_detail,
            "code": "mismatch",
            "attempts_remaining": 2,
        }

    def test_not_authenticated_redirects_browser(self):
        response = self.handle(exceptions.NotAuthenticated(), CallerKind.INTERACTIVE)

        assert response.status_code == status.HTTP_302_FOUND
        assert response["Location"] == "/login?next=%2Fapi%2Fprofile%2Fme%2F"

    def test_other_errors_fall_through(self):
        response = self.handle(exceptions.ValidationError({"email": ["Required."]}))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {"email": ["Required."]}


@pytest.mark.django_db
class TestBoundaryOverHttp:
    def test_anonymous_api_client(self, api_client):
        response = api_client.get(reverse("profile-me"))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data["code"] == "authentication_required"
        assert response["WWW-Authenticate"] == 'Bearer realm="api"'

    def test_anonymous_browser(self, api_client):
        url = reverse("profile-me")

        response = api_client.get(url, HTTP_ACCEPT="text/html")

        assert response.status_code == status.HTTP_302_FOUND
        location = urlparse(response["Location"])
        assert location.path == "/login"
        assert parse_qs(location.query)["next"] == [url]

    def test_unverified_api_client(self, api_client, user_factory):
        user = user_factory(unverified=True)
        api_client.force_authenticate(user)

        response = api_client.get(reverse("profile-me"))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data["code"] == "verification_required"
        assert response.data["next"] == Continuation.VERIFY_REGISTRATION
        assert response.data["address"] == user.email
        context = VerificationContext.load(response.data["context"], OTPPurpose.REGISTRATION)
        assert context.address == user.email

    def test_unverified_browser(self, api_client, user_factory):
        api_client.force_authenticate(user_factory(unverified=True))

        response = api_client.get(reverse("profile-me"), HTTP_ACCEPT="text/html")

        assert response.status_code == status.HTTP_302_FOUND
        location = urlparse(response["Location"])
        assert location.path == "/verify-otp"
        query = parse_qs(location.query)
        assert query["next"] == [reverse("profile-me")]
        assert VerificationContext.load(query["context"][0], OTPPurpose.REGISTRATION)
