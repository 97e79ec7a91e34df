"""
Authentication, verification and profile ViewSets.

This module provides the REST API endpoints for account management using
Django REST Framework (DRF) and SimpleJWT.

Key Components:
    - AuthViewSet: Registration, login, password reset, step-up confirmation,
      cancellation and logout, all driven by one-time codes.
    - ProfileViewSet: Profile reading and updates, password change, two-factor
      settings and account deletion for verified accounts.
    - get_tokens_for_user: Generates JWT access and refresh tokens.
    - OTPThrottle / LoginThrottle: Rate limits for anonymous callers.

Core Workflows:
    1.  **Registration**:
        - POST /api/auth/register/ -> Name, email and password; a code is emailed.
        - POST /api/auth/register/verify/ -> Context + code; account created, session opened.
    2.  **Login**:
        - POST /api/auth/login/ -> Email + password; session opened, or a
          two-factor context if 2FA is on.
        - POST /api/auth/login/verify/ -> Context + code; session opened.
    3.  **Password Reset**:
        - POST /api/auth/password-reset/ -> Email; a code is emailed.
        - POST /api/auth/password-reset/verify/ -> Context + code; returns a reset token.
        - POST /api/auth/password-reset/complete/ -> Reset token + new password.
    4.  **Step-up Confirmation**:
        - POST /api/auth/confirm/ -> Code; returns a single-use confirmation token
          for the guarded profile actions.

Every step that sends a code returns a signed `context`; the next step
sends it back. Codes can be re-sent through the matching ``resend`` action
once `ACCOUNTS_OTP_RESEND_INTERVAL` seconds have passed.
"""

import logging

from django.conf import settings
from django.contrib.auth import get_user_model, update_session_auth_hash
from django.contrib.auth import login as auth_login
from django.contrib.auth import logout as auth_logout
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from drf_spectacular.utils import OpenApiExample, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework.viewsets import ViewSet
from rest_framework_simplejwt.tokens import RefreshToken, TokenError

from .constants import Continuation, OTPPurpose
from .exceptions import AccountNotFound, AuthenticationRequired
from .gate import StepUpGate
from .permissions import IsVerifiedAccount
from .registration import RegistrationService
from .serializers import (
    AccountDeleteSerializer,
    CancelSerializer,
    ConfirmSerializer,
    LoginResendSerializer,
    LoginSerializer,
    LoginVerifySerializer,
    LogoutSerializer,
    PasswordChangeSerializer,
    PasswordResetCompleteSerializer,
    PasswordResetRequestSerializer,
    PasswordResetResendSerializer,
    PasswordResetVerifySerializer,
    ProfileUpdateSerializer,
    RegisterResendSerializer,
    RegisterSerializer,
    RegisterVerifySerializer,
    TwoFactorDisableSerializer,
    TwoFactorEnableSerializer,
    UserSerializer,
)
from .services import VerificationService
from .tokens import VerificationContext, make_confirmation_token, make_reset_token
from .utils import mask_email

logger = logging.getLogger(__name__)

# Fetch the custom User model.
User = get_user_model()


def get_tokens_for_user(user):
    """
    Generate JWT refresh and access tokens for the given user.

    Args:
        user (User): The user instance.

    Returns:
        dict: A dictionary containing:
            - "refresh" (str): The refresh token.
            - "access" (str): The access token.
    """

    refresh = RefreshToken.for_user(user)
    return {
        "refresh": str(refresh),
        "access": str(refresh.access_token),
    }


class OTPThrottle(AnonRateThrottle):
    """
    Rate throttle for endpoints that send or check one-time codes.
    """

    scope = "otp"


class LoginThrottle(AnonRateThrottle):
    scope = "login"


def issue_payload(result, detail, next_step, context=None):
    """Response body for a step that sent (or tried to send) a code."""

    data = {
        "detail": detail,
        "next": next_step,
        "delivered": result.delivered,
        "already_verified": result.already_verified,
        "expires_at": result.expires_at,
    }
    if context is not None:
        data["context"] = context
    return data


def user_by_address(address):
    """
    Raises:
        AccountNotFound: If no account owns `address`.
    """

    user = User.objects.find_by_email(address)
    if user is None:
        raise AccountNotFound()
    return user


class AuthViewSet(ViewSet):
    """
    A ViewSet that handles authentication and code verification.

    Endpoints:
        - register / register_verify / register_resend
        - login / login_verify / login_resend
        - password_reset / password_reset_verify / password_reset_resend /
          password_reset_complete
        - confirm / confirm_resend
        - cancel
        - logout
    """

    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def establish_session(self, request, user, detail):
        """
        Log `user` in and return the session response.

        Browsers get a Django session cookie; API clients use the JWT pair.
        """

        auth_login(request, user)
        logger.info("Session established for %s", mask_email(user.email))
        return Response(
            {
                "detail": detail,
                "next": Continuation.SESSION_ESTABLISHED,
                "is_verified": user.is_verified,
                "user": UserSerializer(user).data,
                "tokens": get_tokens_for_user(user),
            },
            status=status.HTTP_200_OK,
        )

    def resolve_registration_address(self, request, context):
        """
        The address a registration step is about.

        Taken from the signed context, or from the logged-in (unverified)
        account when no context is sent.
        """

        if context is not None:
            return context.address
        if request.user and request.user.is_authenticated:
            return request.user.email
        raise AuthenticationRequired()

    # Registration

    @extend_schema(
        tags=["Authentication"],
        summary="1. Register",
        description="""
        **Endpoint**: POST /api/auth/register/

        Starts a registration. Nothing is written to the user table until the
        emailed code is verified; the pending registration expires after
        `ACCOUNTS_REGISTRATION_PENDING_TTL` seconds.

        **Output**: a signed `context` to send back to `register/verify/`.
        """,
        request=RegisterSerializer,
        responses={
            status.HTTP_201_CREATED: OpenApiResponse(
                description="Code sent.",
                examples=[
                    OpenApiExample(
                        "Code Sent",
                        value={
                            "detail": "Verification code sent.",
                            "next": "verify_registration",
                            "delivered": True,
                            "already_verified": False,
                            "expires_at": "2026-01-01T10:10:00Z",
                            "context": "eyJhIjoiYWRhQGV4YW1wbGUuY29tIi...",
                            "address": "ada@example.com",
                        },
                    )
                ],
            ),
            status.HTTP_400_BAD_REQUEST: OpenApiResponse(description="Validation error."),
        },
    )
    @action(
        detail=False,
        methods=["post"],
        permission_classes=[AllowAny],
        throttle_classes=[OTPThrottle],
    )
    def register(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = RegistrationService.start(data["name"], data["email"], data["password"])
        context = VerificationContext(data["email"], OTPPurpose.REGISTRATION).sign()

        payload = issue_payload(
            result,
            _("Verification code sent."),
            Continuation.VERIFY_REGISTRATION,
            context,
        )
        payload["address"] = data["email"]
        return Response(payload, status=status.HTTP_201_CREATED)

    @extend_schema(
        tags=["Authentication"],
        summary="2. Verify Registration",
        description="""
        **Endpoint**: POST /api/auth/register/verify/

        Verifies the registration code. Send the `context` from
        `register/`, or call this while logged in to an unverified account.

        **Error Handling**:
        - 400 `not_found`: no code pending (request a new one).
        - 400 `expired`: the code expired and was discarded.
        - 400 `mismatch`: wrong code; `attempts_remaining` tells how many
          tries are left before the code is discarded.
        """,
        request=RegisterVerifySerializer,
        responses={
            status.HTTP_200_OK: OpenApiResponse(description="Verified; session opened."),
            status.HTTP_400_BAD_REQUEST: OpenApiResponse(
                description="Code rejected.",
                examples=[
                    OpenApiExample(
                        "Wrong Code",
                        value={
                            "detail": "The verification code is incorrect.",
                            "code": "mismatch",
                            "attempts_remaining": 4,
                        },
                    )
                ],
            ),
        },
    )
    @action(
        detail=False,
        methods=["post"],
        url_path="register/verify",
        url_name="register-verify",
        permission_classes=[AllowAny],
        throttle_classes=[OTPThrottle],
    )
    def register_verify(self, request):
        serializer = RegisterVerifySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        address = self.resolve_registration_address(
            request, serializer.validated_data.get("context")
        )
        code = serializer.validated_data["code"]

        user = User.objects.find_by_email(address)
        if user is not None and not RegistrationService.has_pending(address):
            result = VerificationService.verify_code(user, code, OTPPurpose.REGISTRATION)
        else:
            result = RegistrationService.verify(address, code)

        if result.already_verified:
            # Knowing the context is not proof of identity; only an existing
            # session for the same account continues as logged in.
            logged_in = request.user.is_authenticated and request.user.pk == result.user.pk
            return Response(
                {
                    "detail": _("This account is already verified."),
                    "already_verified": True,
                    "next": (
                        Continuation.SESSION_ESTABLISHED
                        if logged_in
                        else Continuation.LOGIN
                    ),
                },
                status=status.HTTP_200_OK,
            )

        return self.establish_session(
            request, result.user, _("Email verified successfully.")
        )

    @extend_schema(
        tags=["Authentication"],
        summary="Resend Registration Code",
        request=RegisterResendSerializer,
        responses={
            status.HTTP_200_OK: OpenApiResponse(description="New code sent."),
            status.HTTP_429_TOO_MANY_REQUESTS: OpenApiResponse(
                description="Asked again too soon.",
                examples=[
                    OpenApiExample(
                        "Too Soon",
                        value={
                            "detail": "Please wait before requesting another code.",
                            "code": "too_soon",
                            "retry_after": 42,
                        },
                    )
                ],
            ),
        },
    )
    @action(
        detail=False,
        methods=["post"],
        url_path="register/resend",
        url_name="register-resend",
        permission_classes=[AllowAny],
        throttle_classes=[OTPThrottle],
    )
    def register_resend(self, request):
        serializer = RegisterResendSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        address = self.resolve_registration_address(
            request, serializer.validated_data.get("context")
        )

        user = User.objects.find_by_email(address)
        if user is not None:
            result = VerificationService.resend_code(user, OTPPurpose.REGISTRATION)
        else:
            result = RegistrationService.resend(address)

        detail = (
            _("This account is already verified.")
            if result.already_verified
            else _("A new verification code has been sent.")
        )
        context = VerificationContext(address, OTPPurpose.REGISTRATION).sign()
        return Response(
            issue_payload(result, detail, Continuation.VERIFY_REGISTRATION, context),
            status=status.HTTP_200_OK,
        )

    # Login

    @extend_schema(
        tags=["Authentication"],
        summary="3. Login",
        description="""
        **Endpoint**: POST /api/auth/login/

        Authenticates with email and password.

        - Without two-factor: opens a session and returns JWT tokens. An
          unverified account can log in; `is_verified` tells the client to
          finish verification before using protected features.
        - With two-factor: emails a code and returns `next:
          two_factor_challenge` with a `context` for `login/verify/`.
        """,
        request=LoginSerializer,
        responses={
            status.HTTP_200_OK: OpenApiResponse(
                description="Logged in, or second factor required.",
                examples=[
                    OpenApiExample(
                        "Logged In",
                        value={
                            "detail": "Login successful.",
                            "next": "session_established",
                            "is_verified": True,
                            "user": {"id": 1, "name": "Ada Lovelace"},
                            "tokens": {"refresh": "eyJ...", "access": "eyJ..."},
                        },
                    ),
                    OpenApiExample(
                        "Two-factor Challenge",
                        value={
                            "detail": "Enter the code sent to your email.",
                            "next": "two_factor_challenge",
                            "context": "eyJhIjoiYWRhQGV4YW1wbGUuY29tIi...",
                            "delivered": True,
                        },
                    ),
                ],
            ),
            status.HTTP_400_BAD_REQUEST: OpenApiResponse(description="Invalid credentials."),
        },
    )
    @action(
        detail=False,
        methods=["post"],
        permission_classes=[AllowAny],
        throttle_classes=[LoginThrottle],
    )
    def login(self, request):
        serializer = LoginSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data["user"]

        if user.has_two_factor:
            result = VerificationService.issue_code(user, OTPPurpose.LOGIN_2FA)
            context = VerificationContext(user.email, OTPPurpose.LOGIN_2FA).sign()
            payload = issue_payload(
                result,
                _("Enter the code sent to your email."),
                Continuation.TWO_FACTOR_CHALLENGE,
                context,
            )
            payload["address"] = user.email
            return Response(payload, status=status.HTTP_200_OK)

        return self.establish_session(request, user, _("Login successful."))

    @extend_schema(
        tags=["Authentication"],
        summary="4. Verify Two-factor Login",
        request=LoginVerifySerializer,
        responses={
            status.HTTP_200_OK: OpenApiResponse(description="Session opened."),
            status.HTTP_400_BAD_REQUEST: OpenApiResponse(description="Code rejected."),
        },
    )
    @action(
        detail=False,
        methods=["post"],
        url_path="login/verify",
        url_name="login-verify",
        permission_classes=[AllowAny],
        throttle_classes=[OTPThrottle],
    )
    def login_verify(self, request):
        serializer = LoginVerifySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = user_by_address(serializer.validated_data["context"].address)

        result = VerificationService.verify_code(
            user, serializer.validated_data["code"], OTPPurpose.LOGIN_2FA
        )
        return self.establish_session(request, result.user, _("Login successful."))

    @extend_schema(
        tags=["Authentication"],
        summary="Resend Two-factor Login Code",
        request=LoginResendSerializer,
    )
    @action(
        detail=False,
        methods=["post"],
        url_path="login/resend",
        url_name="login-resend",
        permission_classes=[AllowAny],
        throttle_classes=[OTPThrottle],
    )
    def login_resend(self, request):
        serializer = LoginResendSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        context = serializer.validated_data["context"]
        user = user_by_address(context.address)

        result = VerificationService.resend_code(user, OTPPurpose.LOGIN_2FA)
        return Response(
            issue_payload(
                result,
                _("A new verification code has been sent."),
                Continuation.TWO_FACTOR_CHALLENGE,
                VerificationContext(user.email, OTPPurpose.LOGIN_2FA).sign(),
            ),
            status=status.HTTP_200_OK,
        )

    # Password reset

    @extend_schema(
        tags=["Password Reset"],
        summary="5. Request Password Reset Code",
        description="""
        **Endpoint**: POST /api/auth/password-reset/

        Emails a password reset code.

        **Error Handling**:
        - 404 `account_not_found`: no account with this email.
        """,
        request=PasswordResetRequestSerializer,
        responses={
            status.HTTP_200_OK: OpenApiResponse(description="Code sent."),
            status.HTTP_404_NOT_FOUND: OpenApiResponse(description="Unknown email."),
        },
    )
    @action(
        detail=False,
        methods=["post"],
        url_path="password-reset",
        url_name="password-reset",
        permission_classes=[AllowAny],
        throttle_classes=[OTPThrottle],
    )
    def password_reset(self, request):
        serializer = PasswordResetRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = user_by_address(serializer.validated_data["email"])

        result = VerificationService.issue_code(
            user,
            OTPPurpose.PASSWORD_RESET,
            throttle=VerificationService.has_pending_code(user, OTPPurpose.PASSWORD_RESET),
        )
        return Response(
            issue_payload(
                result,
                _("A password reset code has been sent to your email."),
                Continuation.VERIFY_PASSWORD_RESET,
                VerificationContext(user.email, OTPPurpose.PASSWORD_RESET).sign(),
            ),
            status=status.HTTP_200_OK,
        )

    @extend_schema(
        tags=["Password Reset"],
        summary="6. Verify Password Reset Code",
        description="""
        **Endpoint**: POST /api/auth/password-reset/verify/

        Verifies the reset code and returns a `reset_token`, valid for
        `ACCOUNTS_PASSWORD_RESET_MAX_AGE` seconds and for one password change.
        """,
        request=PasswordResetVerifySerializer,
        responses={
            status.HTTP_200_OK: OpenApiResponse(
                description="Code accepted.",
                examples=[
                    OpenApiExample(
                        "Reset Token",
                        value={
                            "detail": "Code verified. You can now set a new password.",
                            "next": "set_password",
                            "reset_token": "eyJ1IjoxMiwiaCI6Ij...",
                        },
                    )
                ],
            ),
        },
    )
    @action(
        detail=False,
        methods=["post"],
        url_path="password-reset/verify",
        url_name="password-reset-verify",
        permission_classes=[AllowAny],
        throttle_classes=[OTPThrottle],
    )
    def password_reset_verify(self, request):
        serializer = PasswordResetVerifySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = user_by_address(serializer.validated_data["context"].address)

        result = VerificationService.verify_code(
            user, serializer.validated_data["code"], OTPPurpose.PASSWORD_RESET
        )
        return Response(
            {
                "detail": _("Code verified. You can now set a new password."),
                "next": result.continuation,
                "reset_token": make_reset_token(result.user),
            },
            status=status.HTTP_200_OK,
        )

    @extend_schema(
        tags=["Password Reset"],
        summary="Resend Password Reset Code",
        request=PasswordResetResendSerializer,
    )
    @action(
        detail=False,
        methods=["post"],
        url_path="password-reset/resend",
        url_name="password-reset-resend",
        permission_classes=[AllowAny],
        throttle_classes=[OTPThrottle],
    )
    def password_reset_resend(self, request):
        serializer = PasswordResetResendSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = user_by_address(serializer.validated_data["context"].address)

        result = VerificationService.resend_code(user, OTPPurpose.PASSWORD_RESET)
        return Response(
            issue_payload(
                result,
                _("A new verification code has been sent."),
                Continuation.VERIFY_PASSWORD_RESET,
                VerificationContext(user.email, OTPPurpose.PASSWORD_RESET).sign(),
            ),
            status=status.HTTP_200_OK,
        )

    @extend_schema(
        tags=["Password Reset"],
        summary="7. Set New Password",
        request=PasswordResetCompleteSerializer,
        responses={
            status.HTTP_200_OK: OpenApiResponse(description="Password changed."),
            status.HTTP_400_BAD_REQUEST: OpenApiResponse(
                description="Invalid token or weak password."
            ),
        },
    )
    @action(
        detail=False,
        methods=["post"],
        url_path="password-reset/complete",
        url_name="password-reset-complete",
        permission_classes=[AllowAny],
    )
    def password_reset_complete(self, request):
        serializer = PasswordResetCompleteSerializer(data=request.data, context={})
        serializer.is_valid(raise_exception=True)

        user = serializer.validated_data["user"]
        user.set_password(serializer.validated_data["password"])
        user.save(update_fields=["password"])
        logger.info("Password reset completed for %s", mask_email(user.email))

        return Response(
            {
                "detail": _("Your password has been reset. Please log in."),
                "next": Continuation.LOGIN,
            },
            status=status.HTTP_200_OK,
        )

    # Step-up confirmation

    @extend_schema(
        tags=["Step-up Confirmation"],
        summary="Confirm Sensitive Action",
        description="""
        **Endpoint**: POST /api/auth/confirm/

        Verifies a step-up code and returns a `confirmation_token`. Pass it
        as `confirmation_token` to the guarded profile action within
        `ACCOUNTS_STEP_UP_WINDOW` seconds. Each token works once.
        """,
        request=ConfirmSerializer,
        responses={
            status.HTTP_200_OK: OpenApiResponse(
                description="Code accepted.",
                examples=[
                    OpenApiExample(
                        "Confirmation Token",
                        value={
                            "detail": "Action confirmed.",
                            "next": "confirmed",
                            "confirmation_token": "eyJ1IjoxLCJuIjoi...",
                            "expires_in": 300,
                        },
                    )
                ],
            ),
        },
    )
    @action(
        detail=False,
        methods=["post"],
        permission_classes=[IsVerifiedAccount],
    )
    def confirm(self, request):
        serializer = ConfirmSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = VerificationService.verify_code(
            request.user, serializer.validated_data["code"], OTPPurpose.STEP_UP
        )
        return Response(
            {
                "detail": _("Action confirmed."),
                "next": result.continuation,
                "confirmation_token": make_confirmation_token(result.user),
                "expires_in": settings.ACCOUNTS_STEP_UP_WINDOW,
            },
            status=status.HTTP_200_OK,
        )

    @extend_schema(
        tags=["Step-up Confirmation"],
        summary="Resend Step-up Code",
        request=None,
    )
    @action(
        detail=False,
        methods=["post"],
        url_path="confirm/resend",
        url_name="confirm-resend",
        permission_classes=[IsVerifiedAccount],
    )
    def confirm_resend(self, request):
        user = request.user
        result = VerificationService.resend_code(user, OTPPurpose.STEP_UP)
        return Response(
            issue_payload(
                result,
                _("A new verification code has been sent."),
                Continuation.CONFIRM,
                VerificationContext(user.email, OTPPurpose.STEP_UP).sign(),
            ),
            status=status.HTTP_200_OK,
        )

    # Cancellation and logout

    @extend_schema(
        tags=["Authentication"],
        summary="Cancel Pending Code",
        description="""
        **Endpoint**: POST /api/auth/cancel/

        Discards the pending code of a flow. With a `context`, only a code
        of that flow is discarded; a pending registration is dropped
        entirely. Without one, the logged-in account's code is discarded.
        """,
        request=CancelSerializer,
    )
    @action(detail=False, methods=["post"], permission_classes=[AllowAny])
    def cancel(self, request):
        serializer = CancelSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        context = serializer.validated_data.get("context")

        if context is None:
            if not request.user.is_authenticated:
                raise AuthenticationRequired()
            VerificationService.cancel_code(request.user)
        elif context.purpose == OTPPurpose.REGISTRATION and RegistrationService.has_pending(
            context.address
        ):
            RegistrationService.cancel(context.address)
        else:
            user = User.objects.find_by_email(context.address)
            if user is not None:
                VerificationService.cancel_code(user, purpose=context.purpose)

        return Response(
            {"detail": _("Verification cancelled."), "next": Continuation.LOGIN},
            status=status.HTTP_200_OK,
        )

    @extend_schema(
        tags=["Authentication"],
        summary="Logout",
        description="""
        **Endpoint**: POST /api/auth/logout/

        Ends the session and, when a `refresh` token is sent, blacklists it.
        """,
        request=LogoutSerializer,
    )
    @action(detail=False, methods=["post"], permission_classes=[IsAuthenticated])
    def logout(self, request):
        serializer = LogoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        refresh_token = serializer.validated_data.get("refresh")

        if refresh_token:
            try:
                # Invalidate the refresh token so it cannot be reused.
                RefreshToken(refresh_token).blacklist()
            except TokenError:
                return Response(
                    {"detail": _("Invalid or expired refresh token.")},
                    status=status.HTTP_400_BAD_REQUEST,
                )

        auth_logout(request)
        return Response(
            {"detail": _("Successfully logged out.")}, status=status.HTTP_200_OK
        )


class ProfileViewSet(ViewSet):
    """
    Profile management for the logged-in, verified account.

    Endpoints:
        - me (GET, PATCH, DELETE) → Read, rename or delete the account.
        - password → Change the password.
        - two_factor_enable / two_factor_disable → Toggle two-factor.

    Password change, two-factor disable and deletion require the current
    password and, when two-factor is on, a step-up confirmation token.
    """

    permission_classes = [IsVerifiedAccount]
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    @extend_schema(
        tags=["Profile"],
        summary="Profile",
        methods=["GET"],
        responses={status.HTTP_200_OK: UserSerializer},
    )
    @extend_schema(
        tags=["Profile"],
        summary="Update Profile",
        methods=["PATCH"],
        request=ProfileUpdateSerializer,
        responses={status.HTTP_200_OK: UserSerializer},
    )
    @extend_schema(
        tags=["Profile"],
        summary="Delete Account",
        methods=["DELETE"],
        request=AccountDeleteSerializer,
        responses={
            status.HTTP_204_NO_CONTENT: None,
            status.HTTP_403_FORBIDDEN: OpenApiResponse(
                description="Step-up confirmation required."
            ),
        },
    )
    @action(detail=False, methods=["get", "patch", "delete"])
    def me(self, request):
        user = request.user

        if request.method == "GET":
            return Response(UserSerializer(user).data)

        if request.method == "PATCH":
            serializer = ProfileUpdateSerializer(user, data=request.data, partial=True)
            serializer.is_valid(raise_exception=True)
            serializer.save()
            return Response(UserSerializer(user).data)

        serializer = AccountDeleteSerializer(
            data=request.data, context={"request": request}
        )
        serializer.is_valid(raise_exception=True)
        StepUpGate.check(user, serializer.validated_data.get("confirmation_token"))

        email = user.email
        auth_logout(request)
        user.delete()
        logger.info("Deleted account %s", mask_email(email))
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        tags=["Profile"],
        summary="Change Password",
        request=PasswordChangeSerializer,
        responses={
            status.HTTP_200_OK: OpenApiResponse(description="Password changed."),
            status.HTTP_403_FORBIDDEN: OpenApiResponse(
                description="Step-up confirmation required."
            ),
        },
    )
    @action(detail=False, methods=["post"])
    def password(self, request):
        serializer = PasswordChangeSerializer(
            data=request.data, context={"request": request}
        )
        serializer.is_valid(raise_exception=True)

        user = request.user
        StepUpGate.check(user, serializer.validated_data.get("confirmation_token"))

        user.set_password(serializer.validated_data["password"])
        user.save(update_fields=["password"])
        update_session_auth_hash(request, user)
        logger.info("Password changed for %s", mask_email(user.email))

        return Response(
            {"detail": _("Password updated.")}, status=status.HTTP_200_OK
        )

    @extend_schema(
        tags=["Profile"],
        summary="Enable Two-factor",
        request=TwoFactorEnableSerializer,
        responses={status.HTTP_200_OK: UserSerializer},
    )
    @action(
        detail=False,
        methods=["post"],
        url_path="two-factor/enable",
        url_name="two-factor-enable",
    )
    def two_factor_enable(self, request):
        serializer = TwoFactorEnableSerializer(
            data=request.data, context={"request": request}
        )
        serializer.is_valid(raise_exception=True)

        user = request.user
        if not user.has_two_factor:
            user.two_factor_enabled = True
            user.two_factor_confirmed_at = timezone.now()
            user.save(update_fields=["two_factor_enabled", "two_factor_confirmed_at"])
            logger.info("Two-factor enabled for %s", mask_email(user.email))

        return Response(UserSerializer(user).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Profile"],
        summary="Disable Two-factor",
        request=TwoFactorDisableSerializer,
        responses={
            status.HTTP_200_OK: UserSerializer,
            status.HTTP_403_FORBIDDEN: OpenApiResponse(
                description="Step-up confirmation required."
            ),
        },
    )
    @action(
        detail=False,
        methods=["post"],
        url_path="two-factor/disable",
        url_name="two-factor-disable",
    )
    def two_factor_disable(self, request):
        serializer = TwoFactorDisableSerializer(
            data=request.data, context={"request": request}
        )
        serializer.is_valid(raise_exception=True)

        user = request.user
        StepUpGate.check(user, serializer.validated_data.get("confirmation_token"))

        user.two_factor_enabled = False
        user.two_factor_confirmed_at = None
        user.save(update_fields=["two_factor_enabled", "two_factor_confirmed_at"])
        logger.info("Two-factor disabled for %s", mask_email(user.email))

        return Response(UserSerializer(user).data, status=status.HTTP_200_OK)
