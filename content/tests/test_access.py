from django.core.exceptions import PermissionDenied
from django.test import SimpleTestCase

from content.access import (
    CREATE_VIEW,
    ITEM_VIEW,
    FieldAccessDenied,
    can_create_is_admin,
    can_update_is_admin,
    check_field_access,
    create_view_field_mode,
    field_mode,
    is_admin_session,
    item_view_field_mode,
)
from content.auth import SessionClaims

ADMIN = SessionClaims(list_key='User', item_id=1, name='Ada', is_admin=True)
EDITOR = SessionClaims(list_key='User', item_id=2, name='Ed', is_admin=False)


class PredicateTest(SimpleTestCase):

    def test_only_admin_sessions_are_admin(self):
        self.assertTrue(is_admin_session(ADMIN))
        self.assertFalse(is_admin_session(EDITOR))
        self.assertFalse(is_admin_session(None))

    def test_create_and_update_hooks_follow_admin_flag(self):
        for hook in (can_create_is_admin, can_update_is_admin):
            self.assertTrue(hook(session=ADMIN))
            self.assertFalse(hook(session=EDITOR))
            self.assertFalse(hook(session=None))

    def test_ui_field_modes(self):
        self.assertEqual(create_view_field_mode(session=ADMIN), 'edit')
        self.assertEqual(create_view_field_mode(session=EDITOR), 'hidden')
        self.assertEqual(item_view_field_mode(session=ADMIN), 'edit')
        self.assertEqual(item_view_field_mode(session=EDITOR), 'read')
        self.assertEqual(item_view_field_mode(session=None), 'read')


class CheckFieldAccessTest(SimpleTestCase):

    def test_non_admin_cannot_write_is_admin_with_any_value(self):
        for operation in ('create', 'update'):
            for value in (True, False):
                with self.subTest(operation=operation, value=value):
                    with self.assertRaises(FieldAccessDenied) as ctx:
                        check_field_access('User', operation, {'name': 'x', 'is_admin': value}, EDITOR)
                    self.assertEqual(ctx.exception.fields, ('is_admin',))

    def test_anonymous_writes_of_is_admin_are_denied(self):
        with self.assertRaises(PermissionDenied):
            check_field_access('User', 'create', {'is_admin': False}, None)

    def test_admin_can_set_is_admin_either_way(self):
        for operation in ('create', 'update'):
            for value in (True, False):
                check_field_access('User', operation, {'is_admin': value}, ADMIN)

    def test_unguarded_fields_are_not_checked(self):
        check_field_access('User', 'update', {'name': 'Ed', 'bio': 'hi', 'confirm_password': 'x'}, EDITOR)
        check_field_access('Post', 'create', {'title': 'Hello', 'status': 'published'}, EDITOR)

    def test_denial_message_names_the_field(self):
        with self.assertRaisesMessage(FieldAccessDenied, 'is_admin'):
            check_field_access('User', 'update', ['is_admin'], EDITOR)


class FieldModeTest(SimpleTestCase):

    def test_guarded_field_modes(self):
        self.assertEqual(field_mode('User', 'is_admin', CREATE_VIEW, EDITOR), 'hidden')
        self.assertEqual(field_mode('User', 'is_admin', ITEM_VIEW, EDITOR), 'read')
        self.assertEqual(field_mode('User', 'is_admin', CREATE_VIEW, ADMIN), 'edit')

    def test_fields_without_ui_hooks_are_editable(self):
        self.assertEqual(field_mode('User', 'name', ITEM_VIEW, EDITOR), 'edit')
        self.assertEqual(field_mode('User', 'new_password', ITEM_VIEW, EDITOR), 'edit')
        self.assertEqual(field_mode('Post', 'status', CREATE_VIEW, None), 'edit')
