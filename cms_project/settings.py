"""
Django settings for cms_project.

Everything environment-specific is read from environment variables. The
session secret is resolved once here; a missing SESSION_SECRET with
NODE_ENV=production stops the process before any request is served.
"""

import os
from pathlib import Path

from cms_project.session import build_session_strategy, is_production

BASE_DIR = Path(__file__).resolve().parent.parent

PRODUCTION = is_production(os.environ)

# --- Sessions / secret ---
SESSION_STRATEGY = build_session_strategy(os.environ)
_session_settings = SESSION_STRATEGY.as_settings()

SECRET_KEY = _session_settings["SECRET_KEY"]
SESSION_ENGINE = _session_settings["SESSION_ENGINE"]
SESSION_COOKIE_AGE = _session_settings["SESSION_COOKIE_AGE"]
SESSION_COOKIE_HTTPONLY = _session_settings["SESSION_COOKIE_HTTPONLY"]
SESSION_COOKIE_SECURE = _session_settings["SESSION_COOKIE_SECURE"]
SESSION_SAVE_EVERY_REQUEST = _session_settings["SESSION_SAVE_EVERY_REQUEST"]
CSRF_COOKIE_SECURE = SESSION_STRATEGY.secure

DEBUG = not PRODUCTION

ALLOWED_HOSTS = [
    host.strip()
    for host in os.environ.get("ALLOWED_HOSTS", "" if PRODUCTION else "localhost,127.0.0.1,testserver").split(",")
    if host.strip()
]

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "content.apps.ContentConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "content.middleware.InitFirstItemMiddleware",
]

ROOT_URLCONF = "cms_project.urls"

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

WSGI_APPLICATION = "cms_project.wsgi.application"
ASGI_APPLICATION = "cms_project.asgi.application"

# --- Database ---
# PostgreSQL when POSTGRES_DB is provided, SQLite otherwise.
if os.environ.get("POSTGRES_DB"):
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": os.environ["POSTGRES_DB"],
            "USER": os.environ.get("POSTGRES_USER", "postgres"),
            "PASSWORD": os.environ.get("POSTGRES_PASSWORD", ""),
            "HOST": os.environ.get("POSTGRES_HOST", "localhost"),
            "PORT": os.environ.get("POSTGRES_PORT", "5432"),
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": os.environ.get("DB_PATH", str(BASE_DIR / "db.sqlite3")),
        }
    }

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# --- Authentication ---
AUTH_USER_MODEL = "content.User"
LOGIN_URL = "admin:login"

AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator", "OPTIONS": {"min_length": 8}},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
]

# --- I18N ---
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# --- Static / media ---
STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"
MEDIA_URL = "media/"
MEDIA_ROOT = os.environ.get("MEDIA_ROOT", str(BASE_DIR / "media"))

# --- Logging ---
# 0=disabled, 1=basic, 2=standard, 3=detailed (see content/security_logger.py)
SECURITY_LOG_LEVEL = int(os.environ.get("SECURITY_LOG_LEVEL", "1" if PRODUCTION else "2"))

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{asctime} [{levelname}] {name}: {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "loggers": {
        "content": {
            "handlers": ["console"],
            "level": os.environ.get("LOG_LEVEL", "INFO"),
            "propagate": False,
        },
        "security": {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": False,
        },
    },
}
