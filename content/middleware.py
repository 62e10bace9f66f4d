# content/middleware.py

import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db.utils import DatabaseError
from django.shortcuts import redirect
from django.urls import reverse

logger = logging.getLogger(__name__)


class InitFirstItemMiddleware:
    """
    Middleware that redirects every request to the init page while the User
    list is empty, so the first user can be created.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def is_exempt(self, path):
        exempt = [reverse('init_first_item'), f"/{settings.STATIC_URL.lstrip('/')}"]
        if settings.MEDIA_URL:
            exempt.append(f"/{settings.MEDIA_URL.lstrip('/')}")
        return any(path == prefix or path.startswith(prefix) for prefix in exempt if prefix != '/')

    def __call__(self, request):
        if self.is_exempt(request.path):
            return self.get_response(request)

        try:
            users_exist = get_user_model().objects.exists()
        except DatabaseError as e:
            # Tables not created yet; let the view report the real error.
            logger.warning(f"[MIDDLEWARE] Could not check for users: {e}")
            return self.get_response(request)

        if not users_exist:
            logger.info(f"[MIDDLEWARE] No users found, redirecting to init from {request.path}")
            return redirect('init_first_item')

        return self.get_response(request)
