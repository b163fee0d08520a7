"""Django settings for the widgetboard JSON API.

Everything deployment-specific is read from `WIDGETBOARD_*` environment
variables. With no environment set the project runs in development mode with
the built-in sample business record.
"""

from __future__ import annotations

import os
from pathlib import Path

import dj_database_url

BASE_DIR = Path(__file__).resolve().parent.parent

_TRUTHY = {"1", "true", "t", "yes", "y", "on"}


def _env_bool(name: str, *, default: bool) -> bool:
    """Return a boolean flag from the environment (unset means `default`)."""

    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def _env_int(name: str, *, default: int) -> int:
    """Return an integer from the environment (unset means `default`).

    Raises:
        ValueError: When the variable is set but is not an integer.
    """

    raw = os.getenv(name)
    return default if raw is None else int(raw.strip())


def _env_csv(name: str, *, default: list[str]) -> list[str]:
    """Return trimmed, non-empty comma-separated values from the environment."""

    raw = os.getenv(name)
    if raw is None:
        return default
    return [item.strip() for item in raw.split(",") if item.strip()]


DEBUG = _env_bool("WIDGETBOARD_DEBUG", default=True)

SECRET_KEY = os.getenv("WIDGETBOARD_SECRET_KEY") or ("widgetboard-dev-only-key" if DEBUG else "")
if not SECRET_KEY:
    raise RuntimeError("WIDGETBOARD_SECRET_KEY must be set when WIDGETBOARD_DEBUG is off.")

ALLOWED_HOSTS: list[str] = _env_csv("WIDGETBOARD_ALLOWED_HOSTS", default=["localhost", "127.0.0.1", "[::1]"])
CSRF_TRUSTED_ORIGINS = _env_csv("WIDGETBOARD_CSRF_TRUSTED_ORIGINS", default=[])

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.staticfiles",
    "dashboard.apps.DashboardConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]
if not DEBUG:
    # Static assets are served by the app process in production.
    MIDDLEWARE.insert(1, "whitenoise.middleware.WhiteNoiseMiddleware")

ROOT_URLCONF = "widgetboard.urls"
WSGI_APPLICATION = "widgetboard.wsgi.application"

# Only Django's own bookkeeping tables live here; widget layouts never do.
DATABASES = {
    "default": dj_database_url.config(
        env="WIDGETBOARD_DATABASE_URL",
        default=f"sqlite:///{BASE_DIR / 'widgetboard.sqlite3'}",
        conn_max_age=_env_int("WIDGETBOARD_DB_CONN_MAX_AGE", default=0 if DEBUG else 60),
    )
}

# Layouts live in the session and sessions live in process memory.
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "widgetboard-sessions",
    }
}
SESSION_ENGINE = "django.contrib.sessions.backends.cache"
SESSION_COOKIE_AGE = _env_int("WIDGETBOARD_SESSION_SECONDS", default=8 * 60 * 60)

# JSON or YAML business record; unset uses `fields.sample`.
WIDGETBOARD_RECORD_PATH = os.getenv("WIDGETBOARD_RECORD_PATH") or None

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"
STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {
        "BACKEND": (
            "django.contrib.staticfiles.storage.StaticFilesStorage"
            if DEBUG
            else "whitenoise.storage.CompressedManifestStaticFilesStorage"
        ),
    },
}

_SECURE_DEFAULT = not DEBUG
SECURE_SSL_REDIRECT = _env_bool("WIDGETBOARD_SSL_REDIRECT", default=_SECURE_DEFAULT)
SESSION_COOKIE_SECURE = _env_bool("WIDGETBOARD_SECURE_COOKIES", default=_SECURE_DEFAULT)
CSRF_COOKIE_SECURE = SESSION_COOKIE_SECURE
SECURE_HSTS_SECONDS = _env_int("WIDGETBOARD_HSTS_SECONDS", default=0 if DEBUG else 3600)
SECURE_HSTS_INCLUDE_SUBDOMAINS = _SECURE_DEFAULT
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
USE_X_FORWARDED_HOST = _env_bool("WIDGETBOARD_USE_X_FORWARDED_HOST", default=_SECURE_DEFAULT)
SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = "DENY"
SECURE_REFERRER_POLICY = "same-origin"

LOG_LEVEL = (os.getenv("WIDGETBOARD_LOG_LEVEL") or ("DEBUG" if DEBUG else "INFO")).upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "fields": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": True},
        "dashboard": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": True},
    },
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
