"""
Admin configuration for the accounts application.

Registers the email-keyed `User` model with the Django admin, extending the
built-in `UserAdmin` to:
    - Drop the username / first name / last name fields it expects.
    - Show verification and two-factor status in the list view.
    - Expose the one-time code slot read-only, for support staff.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _

from .forms import UserChangeForm, UserCreationForm
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin configuration for the `User` model.

    Key customizations:
        - `fieldsets` / `add_fieldsets`: Email and name instead of username.
        - `readonly_fields`: The one-time code columns can be inspected but
          never edited by hand.
        - `ordering`: Newest accounts first.
    """

    add_form = UserCreationForm
    form = UserChangeForm

    list_display = (
        "id",
        "email",
        "name",
        "is_verified",
        "two_factor_enabled",
        "is_staff",
        "date_joined",
    )
    list_display_links = ("id", "email")
    search_fields = ("email", "name")
    list_filter = ("is_verified", "two_factor_enabled", "is_staff", "is_active")

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        (_("Personal info"), {"fields": ("name",)}),
        (
            _("Permissions"),
            {
                "fields": (
                    "is_active",
                    "is_staff",
                    "is_superuser",
                    "groups",
                    "user_permissions",
                )
            },
        ),
        (
            _("Verification"),
            {"fields": ("is_verified", "two_factor_enabled", "two_factor_confirmed_at")},
        ),
        (
            _("Pending code"),
            {
                "classes": ("collapse",),
                "fields": (
                    "otp_purpose",
                    "otp_expires_at",
                    "otp_attempts",
                    "otp_last_sent_at",
                ),
            },
        ),
        (_("Important dates"), {"fields": ("last_login", "date_joined")}),
    )
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "name", "password1", "password2"),
            },
        ),
    )

    # The code itself is never shown, only its metadata.
    readonly_fields = (
        "otp_purpose",
        "otp_expires_at",
        "otp_attempts",
        "otp_last_sent_at",
        "two_factor_confirmed_at",
        "last_login",
        "date_joined",
    )

    ordering = ("-date_joined",)
