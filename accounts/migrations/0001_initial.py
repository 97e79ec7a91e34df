import django.utils.timezone
from django.db import migrations, models

import accounts.managers


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("auth", "0012_alter_user_first_name_max_length"),
    ]

    operations = [
        migrations.CreateModel(
            name="User",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("password", models.CharField(max_length=128, verbose_name="password")),
                (
                    "last_login",
                    models.DateTimeField(
                        blank=True, null=True, verbose_name="last login"
                    ),
                ),
                (
                    "is_superuser",
                    models.BooleanField(
                        default=False,
                        help_text="Designates that this user has all permissions without explicitly assigning them.",
                        verbose_name="superuser status",
                    ),
                ),
                (
                    "is_staff",
                    models.BooleanField(
                        default=False,
                        help_text="Designates whether the user can log into this admin site.",
                        verbose_name="staff status",
                    ),
                ),
                (
                    "is_active",
                    models.BooleanField(
                        default=True,
                        help_text="Designates whether this user should be treated as active. Unselect this instead of deleting accounts.",
                        verbose_name="active",
                    ),
                ),
                (
                    "date_joined",
                    models.DateTimeField(
                        default=django.utils.timezone.now, verbose_name="date joined"
                    ),
                ),
                (
                    "email",
                    models.EmailField(max_length=254, unique=True, verbose_name="email"),
                ),
                ("name", models.CharField(max_length=255, verbose_name="name")),
                (
                    "is_verified",
                    models.BooleanField(default=False, verbose_name="verified"),
                ),
                (
                    "two_factor_enabled",
                    models.BooleanField(default=False, verbose_name="two-factor enabled"),
                ),
                (
                    "two_factor_confirmed_at",
                    models.DateTimeField(
                        blank=True, null=True, verbose_name="two-factor confirmed at"
                    ),
                ),
                (
                    "otp_code",
                    models.CharField(
                        blank=True, max_length=12, null=True, verbose_name="one-time code"
                    ),
                ),
                (
                    "otp_purpose",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("registration", "Registration"),
                            ("login_2fa", "Login two-factor"),
                            ("password_reset", "Password reset"),
                            ("step_up", "Step-up confirmation"),
                        ],
                        max_length=20,
                        null=True,
                        verbose_name="one-time code purpose",
                    ),
                ),
                (
                    "otp_expires_at",
                    models.DateTimeField(
                        blank=True, null=True, verbose_name="one-time code expires at"
                    ),
                ),
                (
                    "otp_attempts",
                    models.PositiveSmallIntegerField(
                        default=0, verbose_name="one-time code attempts"
                    ),
                ),
                (
                    "otp_last_sent_at",
                    models.DateTimeField(
                        blank=True, null=True, verbose_name="one-time code last sent at"
                    ),
                ),
                (
                    "groups",
                    models.ManyToManyField(
                        blank=True,
                        help_text="The groups this user belongs to. A user will get all permissions granted to each of their groups.",
                        related_name="user_set",
                        related_query_name="user",
                        to="auth.group",
                        verbose_name="groups",
                    ),
                ),
                (
                    "user_permissions",
                    models.ManyToManyField(
                        blank=True,
                        help_text="Specific permissions for this user.",
                        related_name="user_set",
                        related_query_name="user",
                        to="auth.permission",
                        verbose_name="user permissions",
                    ),
                ),
            ],
            options={
                "verbose_name": "user",
                "verbose_name_plural": "users",
                "db_table": "users",
            },
            managers=[
                ("objects", accounts.managers.UserManager()),
            ],
        ),
    ]
