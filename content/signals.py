# content/signals.py

from django.contrib.auth.signals import user_logged_in, user_logged_out
from django.dispatch import receiver

from .auth import end_session, start_session


@receiver(user_logged_in)
def store_session_data(sender, request, user, **kwargs):
    """Copy the user's session data projection into the new session."""
    start_session(request, user)


@receiver(user_logged_out)
def clear_session_data(sender, request, user, **kwargs):
    end_session(request, user)
