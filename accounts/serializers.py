"""
Serializers for registration, login, verification codes and profile management.

This module provides a set of Django REST Framework serializers to handle:
    - User profile serialization and updates
    - Registration with email + password
    - Login with email + password
    - Verification code submission, with or without a signed flow context
    - Password reset (request, verify, set new password)
    - Sensitive profile actions guarded by the current password

Key services/utilities used:
    - VerificationContext: Signed token naming the address and purpose of a flow.
    - check_reset_token: Validates the one-time password reset token.
    - Django password validators: Applied to every new password.

Serializers only validate input. Issuing and checking codes is done by the
views through `VerificationService` and `RegistrationService`.

Example:
    >>> serializer = RegisterSerializer(data={
    ...     "name": "Ada Lovelace",
    ...     "email": "Ada@Example.com",
    ...     "password": "difference-engine-1843",
    ...     "password_confirm": "difference-engine-1843",
    ... })
    >>> serializer.is_valid()
    True
    >>> serializer.validated_data["email"]
    'ada@example.com'
"""

from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import RegexValidator
from django.utils.translation import gettext_lazy as _
from drf_spectacular.utils import OpenApiExample, extend_schema_serializer
from rest_framework import serializers

from .constants import OTPPurpose
from .tokens import InvalidToken, VerificationContext, check_reset_token
from .utils import normalize_email_address

# Fetch the custom User model.
User = get_user_model()

digits_only = RegexValidator(r"^\d+$", _("The code must contain digits only."))


def run_password_validators(password, user=None):
    try:
        validate_password(password, user)
    except DjangoValidationError as exc:
        raise serializers.ValidationError({"password": list(exc.messages)})


class ContextField(serializers.CharField):
    """
    A signed `VerificationContext`, decoded on input.

    Args:
        purpose (str, optional): Reject contexts issued for another flow.
    """

    default_error_messages = {
        "invalid_context": _("Verification session is invalid or has expired."),
    }

    def __init__(self, purpose=None, **kwargs):
        self.purpose = purpose
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        token = super().to_internal_value(data)
        try:
            return VerificationContext.load(token, purpose=self.purpose)
        except InvalidToken:
            self.fail("invalid_context")


class UserSerializer(serializers.ModelSerializer):
    """
    Serializer for reading user profile information.

    Meta:
        model (User): The user model in use.
        fields (list): The user fields exposed via API.
    """

    two_factor_enabled = serializers.BooleanField(source="has_two_factor", read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "name",
            "email",
            "is_verified",
            "two_factor_enabled",
            "date_joined",
        ]
        read_only_fields = fields


class ProfileUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["name"]


@extend_schema_serializer(
    examples=[
        OpenApiExample(
            "Register - JSON",
            value={
                "name": "Ada Lovelace",
                "email": "ada@example.com",
                "password": "difference-engine-1843",
                "password_confirm": "difference-engine-1843",
            },
            description="A verification code is emailed; no account exists until it is verified.",
        ),
    ],
)
class RegisterSerializer(serializers.Serializer):
    """
    Serializer for starting a registration.

    **Validation Flow**:
    1. Normalize the email (trimmed, lowercase).
    2. Reject addresses that already belong to an account.
    3. Require matching passwords that pass Django's password validators.
    """

    name = serializers.CharField(max_length=255)
    email = serializers.EmailField(max_length=254)
    password = serializers.CharField(write_only=True, trim_whitespace=False)
    password_confirm = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate_email(self, value):
        value = normalize_email_address(value)
        if User.objects.filter(email=value).exists():
            raise serializers.ValidationError(
                _("An account with this email address already exists.")
            )
        return value

    def validate(self, attrs):
        if attrs["password"] != attrs["password_confirm"]:
            raise serializers.ValidationError(
                {"password_confirm": _("Passwords do not match.")}
            )

        run_password_validators(
            attrs["password"], User(email=attrs["email"], name=attrs["name"])
        )
        return attrs


@extend_schema_serializer(
    examples=[
        OpenApiExample(
            "Verify Code - JSON",
            value={"context": "eyJhIjoiYWRhQGV4YW1wbGUuY29tIi...", "code": "042917"},
            description="`context` comes from the response of the step that sent the code.",
        ),
    ],
)
class CodeSerializer(serializers.Serializer):
    """
    Serializer for submitting a verification code.

    **Input Format**:
    - JSON: `{"context": "<signed context>", "code": "042917"}`

    Subclasses pin the flow the context must belong to.
    """

    purpose = None
    context_required = True

    code = serializers.CharField(max_length=12, validators=[digits_only])

    def get_fields(self):
        fields = super().get_fields()
        fields["context"] = ContextField(
            purpose=self.purpose, required=self.context_required
        )
        return fields


class RegisterVerifySerializer(CodeSerializer):
    purpose = OTPPurpose.REGISTRATION
    context_required = False


class LoginVerifySerializer(CodeSerializer):
    purpose = OTPPurpose.LOGIN_2FA


class PasswordResetVerifySerializer(CodeSerializer):
    purpose = OTPPurpose.PASSWORD_RESET


class ConfirmSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=12, validators=[digits_only])


class ContextSerializer(serializers.Serializer):
    """Serializer for steps that only need the signed context (resend, cancel)."""

    purpose = None
    context_required = True

    def get_fields(self):
        fields = super().get_fields()
        fields["context"] = ContextField(
            purpose=self.purpose, required=self.context_required
        )
        return fields


class RegisterResendSerializer(ContextSerializer):
    purpose = OTPPurpose.REGISTRATION
    context_required = False


class LoginResendSerializer(ContextSerializer):
    purpose = OTPPurpose.LOGIN_2FA


class PasswordResetResendSerializer(ContextSerializer):
    purpose = OTPPurpose.PASSWORD_RESET


class CancelSerializer(ContextSerializer):
    context_required = False


@extend_schema_serializer(
    examples=[
        OpenApiExample(
            "Login - JSON",
            value={"email": "ada@example.com", "password": "difference-engine-1843"},
            description="Returns tokens, or a two-factor context if 2FA is on.",
        ),
    ],
)
class LoginSerializer(serializers.Serializer):
    """
    Serializer for logging in with email and password.

    **Security Notes**:
    - Failed logins return a generic error (no enumeration).
    - Rate limited by the `login` throttle scope.
    """

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate(self, attrs):
        """
        Authenticate the credentials.

        Raises:
            serializers.ValidationError: If the credentials are invalid or
                the account is disabled.

        Returns:
            dict: Validated attributes with the authenticated `user`.
        """

        user = authenticate(
            request=self.context.get("request"),
            email=normalize_email_address(attrs["email"]),
            password=attrs["password"],
        )
        if user is None:
            raise serializers.ValidationError(_("Invalid email or password."))

        attrs["user"] = user
        return attrs


class PasswordResetRequestSerializer(serializers.Serializer):
    email = serializers.EmailField()

    def validate_email(self, value):
        return normalize_email_address(value)


@extend_schema_serializer(
    examples=[
        OpenApiExample(
            "Set New Password - JSON",
            value={
                "reset_token": "eyJ1IjoxMiwiaCI6Ij...",
                "password": "analytical-engine-1837",
                "password_confirm": "analytical-engine-1837",
            },
        ),
    ],
)
class PasswordResetCompleteSerializer(serializers.Serializer):
    """
    Serializer for setting a new password with a reset token.

    The token is only valid for `ACCOUNTS_PASSWORD_RESET_MAX_AGE` seconds
    and stops working once the password has changed.
    """

    reset_token = serializers.CharField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)
    password_confirm = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate_reset_token(self, value):
        try:
            self.context["user"] = check_reset_token(value)
        except InvalidToken:
            raise serializers.ValidationError(
                _("Reset token is invalid or has expired.")
            )
        return value

    def validate(self, attrs):
        if attrs["password"] != attrs["password_confirm"]:
            raise serializers.ValidationError(
                {"password_confirm": _("Passwords do not match.")}
            )

        user = self.context["user"]
        run_password_validators(attrs["password"], user)
        attrs["user"] = user
        return attrs


class LogoutSerializer(serializers.Serializer):
    refresh = serializers.CharField(required=False)


class CurrentPasswordSerializer(serializers.Serializer):
    """
    Base serializer for sensitive profile actions.

    The current password is always required. `confirmation_token` is the
    proof of a verified step-up code; it is only needed when two-factor is
    on (see `accounts.gate.StepUpGate`).
    """

    current_password = serializers.CharField(write_only=True, trim_whitespace=False)
    confirmation_token = serializers.CharField(required=False, allow_blank=True)

    def validate_current_password(self, value):
        user = self.context["request"].user
        if not user.check_password(value):
            raise serializers.ValidationError(_("The password is incorrect."))
        return value


class PasswordChangeSerializer(CurrentPasswordSerializer):
    password = serializers.CharField(write_only=True, trim_whitespace=False)
    password_confirm = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate(self, attrs):
        if attrs["password"] != attrs["password_confirm"]:
            raise serializers.ValidationError(
                {"password_confirm": _("Passwords do not match.")}
            )

        run_password_validators(attrs["password"], self.context["request"].user)
        return attrs


class TwoFactorEnableSerializer(CurrentPasswordSerializer):
    confirmation_token = None


class TwoFactorDisableSerializer(CurrentPasswordSerializer):
    pass


class AccountDeleteSerializer(CurrentPasswordSerializer):
    pass
