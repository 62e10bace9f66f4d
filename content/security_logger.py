"""
Security Event Logging Module

Provides configurable security event logging with multiple detail levels.
Authentication and access-control events (logins, logouts, field access
denials, first-admin bootstrap) are logged through this module.

Log Levels:
- 0: Disabled - No security logging
- 1: Basic - Only critical security events (access denials)
- 2: Standard - Normal security events (logins, logouts, bootstrap grants)
- 3: Detailed - All security events with full context
"""

import logging
from typing import Iterable, Optional

from django.conf import settings

# Get logger for security events
logger = logging.getLogger('security')


class SecurityLogger:
    """
    Centralized security logging with configurable detail levels.

    Usage:
        SecurityLogger.log_login(user_id, email, is_admin)
        SecurityLogger.log_field_access_denied('User', 'update', ['is_admin'], user_id)
    """

    @staticmethod
    def get_log_level() -> int:
        """
        Get current security log level from settings.

        Returns:
            int: Log level (0=disabled, 1=basic, 2=standard, 3=detailed)
        """
        return getattr(settings, 'SECURITY_LOG_LEVEL', 0)

    @staticmethod
    def is_enabled(min_level: int = 1) -> bool:
        """
        Check if security logging is enabled at given level.

        Args:
            min_level: Minimum level required to log this event

        Returns:
            bool: True if logging is enabled at this level
        """
        return SecurityLogger.get_log_level() >= min_level

    # ========================================================================
    # Session Events
    # ========================================================================

    @staticmethod
    def log_login(user_id: int, email: str, is_admin: bool):
        """
        Log a successful login and the session data it carries.

        Examples:
            Level 2: [AUTH_LOGIN] User 5 logged in
            Level 3: [AUTH_LOGIN] User 5 (jane@example.com) logged in - admin: True
        """
        if SecurityLogger.is_enabled(2):
            if SecurityLogger.get_log_level() >= 3:
                logger.info(f"[AUTH_LOGIN] User {user_id} ({email}) logged in - admin: {is_admin}")
            else:
                logger.info(f"[AUTH_LOGIN] User {user_id} logged in")

    @staticmethod
    def log_logout(user_id: Optional[int]):
        if SecurityLogger.is_enabled(2):
            logger.info(f"[AUTH_LOGOUT] User {user_id} logged out")

    @staticmethod
    def log_session_rejected(path: str, reason: str):
        """
        Log a request refused because it carried no valid session.

        Level 3 (Detailed) only; unauthenticated hits are routine.
        """
        if SecurityLogger.is_enabled(3):
            logger.info(f"[AUTH_REJECT] {path}: {reason}")

    # ========================================================================
    # Access Control Events
    # ========================================================================

    @staticmethod
    def log_field_access_denied(list_key: str, operation: str, fields: Iterable[str],
                                user_id: Optional[int] = None):
        """
        Log a write refused by a field access predicate.

        Level 1 (Basic): always logged, privilege escalation attempts are security relevant

        Examples:
            Level 1: [ACCESS_DENIED] update User.is_admin
            Level 3: [ACCESS_DENIED] update User.is_admin - session user 7
        """
        if SecurityLogger.is_enabled(1):
            names = ', '.join(f"{list_key}.{name}" for name in fields)
            if SecurityLogger.get_log_level() >= 3:
                logger.warning(f"[ACCESS_DENIED] {operation} {names} - session user {user_id}")
            else:
                logger.warning(f"[ACCESS_DENIED] {operation} {names}")

    @staticmethod
    def log_bootstrap_admin(user_id: int, email: str):
        """Log that the first user was granted admin rights."""
        if SecurityLogger.is_enabled(2):
            logger.warning(f"[BOOTSTRAP] First user {user_id} ({email}) granted admin")

    @staticmethod
    def log_bootstrap_conflict(email: str):
        """Log a concurrent first-user creation that lost the bootstrap slot."""
        if SecurityLogger.is_enabled(1):
            logger.warning(f"[BOOTSTRAP] Concurrent first user {email} saved without bootstrap grant")

    # ========================================================================
    # Generic Security Events
    # ========================================================================

    @staticmethod
    def log_security_event(event_type: str, message: str, level: int = 2, severity: str = 'info'):
        """
        Log a generic security event.

        Args:
            event_type: Type of event (e.g., 'CONFIG', 'SCHEMA')
            message: Event message
            level: Minimum log level required (1-3)
            severity: Log severity ('debug', 'info', 'warning', 'error')
        """
        if SecurityLogger.is_enabled(level):
            log_func = getattr(logger, severity, logger.info)
            log_func(f"[{event_type}] {message}")
