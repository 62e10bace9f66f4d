# content/access.py

"""
Field access predicates.

Guarded fields declare two kinds of hooks in content/schema.py:

- access hooks (create / update): authoritative, checked on every write by
  check_field_access()
- UI field-mode hooks (create view / item view): only decide how the admin
  renders the field; they never replace the access hooks

Every hook receives the current SessionClaims (or None) as ``session``.
"""

from django.core.exceptions import PermissionDenied

from .security_logger import SecurityLogger

FIELD_MODE_EDIT = 'edit'
FIELD_MODE_READ = 'read'
FIELD_MODE_HIDDEN = 'hidden'

CREATE_VIEW = 'create_view'
ITEM_VIEW = 'item_view'


class FieldAccessDenied(PermissionDenied):
    """Raised when a write touches a field the session may not write."""

    def __init__(self, list_key, operation, fields):
        self.list_key = list_key
        self.operation = operation
        self.fields = tuple(fields)
        super().__init__(
            f"You do not have access to {operation} {', '.join(self.fields)} on {list_key}"
        )


def is_admin_session(session):
    """True only when the session data carries is_admin = True."""
    return session is not None and session.is_admin is True


# Only admins can set the is_admin flag for any user.
def can_create_is_admin(session):
    return is_admin_session(session)


def can_update_is_admin(session):
    return is_admin_session(session)


# All users can see the is_admin status, only admins can change it.
def create_view_field_mode(session):
    return FIELD_MODE_EDIT if is_admin_session(session) else FIELD_MODE_HIDDEN


def item_view_field_mode(session):
    return FIELD_MODE_EDIT if is_admin_session(session) else FIELD_MODE_READ


def check_field_access(list_key, operation, data, session, lists=None):
    """
    Enforce field access hooks for a write.

    Args:
        list_key: Name of the list being written ('User', 'Post', ...)
        operation: 'create' or 'update'
        data: Mapping (or iterable) of the field names being written
        session: SessionClaims of the writer, or None
        lists: Schema to check against (defaults to content.schema.LISTS)

    Raises:
        FieldAccessDenied: if any written field's hook returns a falsy value
    """
    if lists is None:
        from .schema import LISTS
        lists = LISTS

    fields = lists[list_key].fields
    denied = []
    for name in data:
        config = fields.get(name)
        if config is None or config.access is None:
            continue
        hook = getattr(config.access, operation, None)
        if hook is not None and not hook(session=session):
            denied.append(name)

    if denied:
        SecurityLogger.log_field_access_denied(
            list_key, operation, denied, getattr(session, 'item_id', None)
        )
        raise FieldAccessDenied(list_key, operation, denied)


def field_mode(list_key, field_name, view, session, lists=None):
    """
    Resolve how the admin should render a field ('edit', 'read' or 'hidden').

    Fields without a UI hook for the view are editable.
    """
    if lists is None:
        from .schema import LISTS
        lists = LISTS

    config = lists[list_key].fields.get(field_name)
    if config is None or config.ui is None:
        return FIELD_MODE_EDIT
    mode = getattr(config.ui, view, None)
    if mode is None:
        return FIELD_MODE_EDIT
    if callable(mode):
        return mode(session=session)
    return mode
