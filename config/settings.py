"""
Django settings for the artvault project.

Environment-specific values (secret key, debug flag, hosts, database path,
mail transport) are read from the process environment, optionally seeded
from a local ``.env`` file via `python-dotenv`.

The ``ACCOUNTS_*`` block configures the one-time code lifecycle used by the
`accounts` app; the ``MET_MUSEUM_*`` block configures the museum proxy.
"""

import os
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / ".env")


def env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def env_int(name, default):
    value = os.environ.get(name)
    return int(value) if value else default


SECRET_KEY = os.environ.get(
    "DJANGO_SECRET_KEY", "django-insecure-artvault-development-key"
)

DEBUG = env_bool("DJANGO_DEBUG", default=False)

ALLOWED_HOSTS = [
    host.strip()
    for host in os.environ.get("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")
    if host.strip()
]


# Application definition

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # Third party
    "rest_framework",
    "rest_framework_simplejwt.token_blacklist",
    "django_filters",
    "drf_spectacular",
    # Local
    "accounts",
    "collection",
    "museum",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "accounts.middleware.CallerKindMiddleware",
]

ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "config.wsgi.application"


# Database

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / os.environ.get("DATABASE_PATH", "db.sqlite3"),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

AUTH_USER_MODEL = "accounts.User"


# Password validation

AUTH_PASSWORD_VALIDATORS = [
    {
        "NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.MinimumLengthValidator",
        "OPTIONS": {"min_length": 8},
    },
    {
        "NAME": "django.contrib.auth.password_validation.CommonPasswordValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.NumericPasswordValidator",
    },
]


# Cache (OTP throttles, pending registrations, museum responses)

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "artvault",
    }
}


# Internationalization

LANGUAGE_CODE = "en-us"

TIME_ZONE = "UTC"

USE_I18N = True

USE_TZ = True


# Static files

STATIC_URL = "static/"


# Mail

EMAIL_BACKEND = os.environ.get(
    "EMAIL_BACKEND", "django.core.mail.backends.console.EmailBackend"
)
EMAIL_HOST = os.environ.get("EMAIL_HOST", "localhost")
EMAIL_PORT = env_int("EMAIL_PORT", 25)
EMAIL_HOST_USER = os.environ.get("EMAIL_HOST_USER", "")
EMAIL_HOST_PASSWORD = os.environ.get("EMAIL_HOST_PASSWORD", "")
EMAIL_USE_TLS = env_bool("EMAIL_USE_TLS", default=False)
DEFAULT_FROM_EMAIL = os.environ.get("DEFAULT_FROM_EMAIL", "no-reply@artvault.local")


# Interactive callers are redirected to these front-end screens.

LOGIN_URL = "/login"
ACCOUNTS_VERIFICATION_URL = "/verify-otp"
ACCOUNTS_CONFIRMATION_URL = "/confirm"


# One-time codes

ACCOUNTS_OTP_LENGTH = 6
ACCOUNTS_OTP_TTL = env_int("ACCOUNTS_OTP_TTL", 600)
ACCOUNTS_OTP_RESEND_INTERVAL = env_int("ACCOUNTS_OTP_RESEND_INTERVAL", 60)
ACCOUNTS_OTP_MAX_ATTEMPTS = env_int("ACCOUNTS_OTP_MAX_ATTEMPTS", 5)
ACCOUNTS_STEP_UP_WINDOW = env_int("ACCOUNTS_STEP_UP_WINDOW", 300)
ACCOUNTS_CONTEXT_MAX_AGE = env_int("ACCOUNTS_CONTEXT_MAX_AGE", 900)
ACCOUNTS_PASSWORD_RESET_MAX_AGE = env_int("ACCOUNTS_PASSWORD_RESET_MAX_AGE", 300)
ACCOUNTS_REGISTRATION_PENDING_TTL = env_int("ACCOUNTS_REGISTRATION_PENDING_TTL", 3600)


# Metropolitan Museum of Art open access API

MET_MUSEUM_BASE_URL = os.environ.get(
    "MET_MUSEUM_BASE_URL",
    "https://collectionapi.metmuseum.org/public/collection/v1",
)
MET_MUSEUM_SEARCH_TTL = 60 * 60 * 24
MET_MUSEUM_OBJECT_TTL = 60 * 60 * 24 * 7
MET_MUSEUM_BATCH_LIMIT = 20


# Django REST Framework

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "rest_framework_simplejwt.authentication.JWTAuthentication",
        "rest_framework.authentication.SessionAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
    "DEFAULT_FILTER_BACKENDS": [
        "django_filters.rest_framework.DjangoFilterBackend",
    ],
    "DEFAULT_THROTTLE_RATES": {
        "otp": os.environ.get("ACCOUNTS_OTP_THROTTLE_RATE", "20/minute"),
        "login": os.environ.get("ACCOUNTS_LOGIN_THROTTLE_RATE", "5/minute"),
    },
    "EXCEPTION_HANDLER": "accounts.boundary.exception_handler",
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
}

SIMPLE_JWT = {
    "ACCESS_TOKEN_LIFETIME": timedelta(minutes=60),
    "REFRESH_TOKEN_LIFETIME": timedelta(days=1),
    "ROTATE_REFRESH_TOKENS": False,
    "BLACKLIST_AFTER_ROTATION": True,
    "AUTH_HEADER_TYPES": ("Bearer",),
}

SPECTACULAR_SETTINGS = {
    "TITLE": "Artvault API",
    "DESCRIPTION": "Accounts with OTP verification, personal art collections "
    "and a Metropolitan Museum proxy.",
    "VERSION": "0.1.0",
    "SERVE_INCLUDE_SCHEMA": False,
}


# Logging

LOG_LEVEL = os.environ.get("DJANGO_LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{asctime} {levelname} {name} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
    "loggers": {
        "accounts": {"level": LOG_LEVEL},
        "collection": {"level": LOG_LEVEL},
        "museum": {"level": LOG_LEVEL},
    },
}
