# cms_project/session.py

"""
Session strategy for the CMS.

Sessions are stateless: Django's signed-cookie session engine stores the whole
session in a cookie signed with SECRET_KEY. This module resolves that secret
from the environment once, when settings are imported, and is kept free of
model imports so settings.py can use it before the app registry is ready.
"""

from dataclasses import dataclass

from django.core.exceptions import ImproperlyConfigured

# How long people remain logged in. A fresh cookie is issued on every login.
SESSION_MAX_AGE = 60 * 60 * 24 * 30  # 30 days

DEV_SESSION_SECRET = "-- DEV COOKIE SECRET; CHANGE ME --"

SIGNED_COOKIE_ENGINE = "django.contrib.sessions.backends.signed_cookies"


def is_production(environ):
    """Returns True when the runtime environment is flagged as production."""
    return environ.get("NODE_ENV") == "production"


def resolve_session_secret(environ):
    """
    Resolve the session signing secret.

    Args:
        environ: Mapping of environment variables (usually os.environ)

    Returns:
        str: SESSION_SECRET if set, otherwise the development placeholder

    Raises:
        ImproperlyConfigured: when SESSION_SECRET is missing in production
    """
    secret = environ.get("SESSION_SECRET")
    if secret:
        return secret

    if is_production(environ):
        raise ImproperlyConfigured(
            "The SESSION_SECRET environment variable must be set in production"
        )
    return DEV_SESSION_SECRET


@dataclass(frozen=True)
class SessionStrategy:
    """Signed, stateless session settings held for the process lifetime."""

    secret: str
    max_age: int = SESSION_MAX_AGE
    secure: bool = False

    @property
    def uses_placeholder_secret(self):
        return self.secret == DEV_SESSION_SECRET

    def as_settings(self):
        """Returns the Django settings that implement this strategy."""
        return {
            "SECRET_KEY": self.secret,
            "SESSION_ENGINE": SIGNED_COOKIE_ENGINE,
            "SESSION_COOKIE_AGE": self.max_age,
            "SESSION_COOKIE_HTTPONLY": True,
            "SESSION_COOKIE_SECURE": self.secure,
            "SESSION_SAVE_EVERY_REQUEST": False,
        }


def build_session_strategy(environ):
    """Build the session strategy from the environment (fails fast in production)."""
    return SessionStrategy(
        secret=resolve_session_secret(environ),
        secure=is_production(environ),
    )
