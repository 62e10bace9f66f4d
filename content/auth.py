# content/auth.py

"""
Authentication configuration for the CMS.

The User list is the identity store: ``email`` identifies a user and
``password`` is the secret. At login a small projection of the user
(``name`` and ``is_admin``) is copied into the signed session cookie; access
predicates read that projection instead of querying the database.
"""

from dataclasses import dataclass, field
from functools import wraps
from typing import Optional, Tuple

from django.db import transaction
from django.http import JsonResponse

from .security_logger import SecurityLogger

SESSION_KEY = 'cms_session'


@dataclass(frozen=True)
class InitFirstItem:
    """Fields asked for when the User list is empty, and data forced onto that item."""
    fields: Tuple[str, ...]
    item_data: dict = field(default_factory=dict)


@dataclass(frozen=True)
class AuthConfig:
    list_key: str
    identity_field: str
    secret_field: str
    session_data: Tuple[str, ...]
    init_first_item: InitFirstItem


AUTH_CONFIG = AuthConfig(
    list_key='User',
    identity_field='email',
    secret_field='password',
    session_data=('name', 'is_admin'),
    init_first_item=InitFirstItem(
        fields=('name', 'email', 'password', 'is_admin'),
        item_data={'is_admin': True},
    ),
)


@dataclass(frozen=True)
class SessionClaims:
    """Typed view of the session data carried in the cookie."""
    list_key: str
    item_id: int
    name: str = ''
    is_admin: bool = False


def session_payload(user, config=AUTH_CONFIG):
    """Builds the session projection stored at login."""
    return {
        'list_key': config.list_key,
        'item_id': user.pk,
        'data': {name: getattr(user, name) for name in config.session_data},
    }


def claims_from_session(session) -> Optional[SessionClaims]:
    """
    Read session claims from a Django session (or any mapping).

    Returns:
        SessionClaims, or None when the session carries no CMS data
    """
    if session is None:
        return None
    payload = session.get(SESSION_KEY)
    if not payload:
        return None
    data = payload.get('data') or {}
    return SessionClaims(
        list_key=payload.get('list_key', ''),
        item_id=payload.get('item_id'),
        name=data.get('name', ''),
        is_admin=data.get('is_admin') is True,
    )


def claims_from_request(request) -> Optional[SessionClaims]:
    """
    Session claims for the current request.

    The cookie identifies the item; the session data fields are re-read from
    the user loaded for this request, so a revoked admin flag takes effect
    immediately rather than at the next login.
    """
    user = getattr(request, 'user', None)
    if user is None or not user.is_authenticated:
        return None
    claims = claims_from_session(getattr(request, 'session', None))
    if claims is None or claims.item_id != user.pk:
        return None
    return claims_from_session({SESSION_KEY: session_payload(user)})


def start_session(request, user):
    """Stores the session projection for a freshly logged in user."""
    request.session[SESSION_KEY] = session_payload(user)
    SecurityLogger.log_login(user.pk, user.email, user.is_admin)


def end_session(request, user):
    if request is not None and hasattr(request, 'session'):
        request.session.pop(SESSION_KEY, None)
    SecurityLogger.log_logout(getattr(user, 'pk', None))


class FirstItemExists(Exception):
    """Raised when the first user is requested but the User list is not empty."""


def create_first_item(user, config=AUTH_CONFIG):
    """
    Save an unsaved user as the first item of the User list.

    The init item data (is_admin = True) is applied before saving. The save is
    rolled back unless this user took the bootstrap slot, so a concurrent or
    late second "first user" never ends up with the item data.

    Raises:
        FirstItemExists: when another user already exists
    """
    for name, value in config.init_first_item.item_data.items():
        setattr(user, name, value)
    with transaction.atomic():
        user.save()
        if not user.is_first_admin:
            raise FirstItemExists("The first user has already been created")
    return user


def with_auth(view_func):
    """
    Decorator gating a view on a valid CMS session.

    The claims are made available to the view as ``request.cms_session``.
    Requests without a valid session get a JSON 401.
    """
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        claims = claims_from_request(request)
        if claims is None:
            SecurityLogger.log_session_rejected(request.path, 'no valid session')
            return JsonResponse({'error': 'Authentication required'}, status=401)
        request.cms_session = claims
        return view_func(request, *args, **kwargs)

    return wrapper
