from django.apps import AppConfig
import logging

logger = logging.getLogger(__name__)


class ContentConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'content'

    def ready(self):
        """
        Called once when Django starts.

        Connects the login/logout handlers that maintain session data and
        registers the schema system check.
        """
        from . import checks, signals  # noqa: F401
        from .security_logger import SecurityLogger

        from django.conf import settings
        strategy = settings.SESSION_STRATEGY
        logger.debug(
            f"[STARTUP] Stateless sessions, max age {strategy.max_age}s, "
            f"placeholder secret: {strategy.uses_placeholder_secret}"
        )
        if strategy.uses_placeholder_secret:
            SecurityLogger.log_security_event(
                'CONFIG',
                "SESSION_SECRET is not set, sessions are signed with the development placeholder",
                level=1,
                severity='warning',
            )
