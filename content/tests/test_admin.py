from types import SimpleNamespace

from django.contrib import admin
from django.test import RequestFactory, TestCase
from django.urls import reverse

from content.access import FieldAccessDenied
from content.auth import SESSION_KEY, session_payload
from content.models import Event, Post, Tag, User

PASSWORD = 'Str0ng-passphrase!'


class AdminTestCase(TestCase):

    def setUp(self):
        self.admin = User.objects.create_user(email='admin@example.com', password=PASSWORD, name='Admin')
        self.editor = User.objects.create_user(email='editor@example.com', password=PASSWORD, name='Editor')

    def user_form_data(self, **overrides):
        data = {
            'name': 'New Person',
            'email': 'new@example.com',
            'new_password': PASSWORD,
            'confirm_password': PASSWORD,
            'bio': '',
            'linkedin': '',
            'github': '',
            'twitter': '',
            '_save': 'Save',
        }
        data.update(overrides)
        return data


class UserAdminFieldModeTest(AdminTestCase):

    def test_admin_sees_editable_is_admin_on_create(self):
        self.client.force_login(self.admin)
        response = self.client.get(reverse('admin:content_user_add'))
        self.assertEqual(response.status_code, 200)
        self.assertIn('is_admin', response.context['adminform'].form.fields)

    def test_non_admin_create_view_hides_is_admin(self):
        self.client.force_login(self.editor)
        response = self.client.get(reverse('admin:content_user_add'))
        self.assertEqual(response.status_code, 200)
        self.assertNotIn('is_admin', response.context['adminform'].form.fields)
        self.assertNotContains(response, 'name="is_admin"')

    def test_non_admin_item_view_shows_is_admin_read_only(self):
        self.client.force_login(self.editor)
        response = self.client.get(reverse('admin:content_user_change', args=[self.admin.pk]))
        self.assertEqual(response.status_code, 200)
        self.assertNotIn('is_admin', response.context['adminform'].form.fields)
        self.assertIn('is_admin', response.context['adminform'].readonly_fields)

    def test_admin_item_view_edits_is_admin(self):
        self.client.force_login(self.admin)
        response = self.client.get(reverse('admin:content_user_change', args=[self.editor.pk]))
        self.assertIn('is_admin', response.context['adminform'].form.fields)


class UserAdminWriteTest(AdminTestCase):

    def test_admin_can_grant_admin(self):
        self.client.force_login(self.admin)
        response = self.client.post(reverse('admin:content_user_add'), self.user_form_data(is_admin='on'))
        self.assertEqual(response.status_code, 302)
        created = User.objects.get(email='new@example.com')
        self.assertTrue(created.is_admin)
        self.assertTrue(created.check_password(PASSWORD))

    def test_admin_can_revoke_admin(self):
        other_admin = User.objects.create_user(
            email='other@example.com', password=PASSWORD, name='Other', is_admin=True,
        )
        self.client.force_login(self.admin)
        data = self.user_form_data(name='Other', email='other@example.com', new_password='', confirm_password='')
        response = self.client.post(reverse('admin:content_user_change', args=[other_admin.pk]), data)
        self.assertEqual(response.status_code, 302)
        other_admin.refresh_from_db()
        self.assertFalse(other_admin.is_admin)
        self.assertTrue(other_admin.check_password(PASSWORD))

    def test_non_admin_cannot_escalate_through_the_form(self):
        self.client.force_login(self.editor)
        data = self.user_form_data(name='Editor', email='editor@example.com', new_password='',
                                   confirm_password='', is_admin='on')
        response = self.client.post(reverse('admin:content_user_change', args=[self.editor.pk]), data)
        self.assertEqual(response.status_code, 302)
        self.editor.refresh_from_db()
        self.assertFalse(self.editor.is_admin)

    def test_demoted_admin_cannot_regrant_themselves(self):
        other_admin = User.objects.create_user(
            email='other@example.com', password=PASSWORD, name='Other', is_admin=True,
        )
        self.client.force_login(other_admin)
        User.objects.filter(pk=other_admin.pk).update(is_admin=False)

        data = self.user_form_data(name='Other', email='other@example.com', new_password='',
                                   confirm_password='', is_admin='on')
        self.client.post(reverse('admin:content_user_change', args=[other_admin.pk]), data)
        other_admin.refresh_from_db()
        self.assertFalse(other_admin.is_admin)

    def test_non_admin_created_users_are_not_admin(self):
        self.client.force_login(self.editor)
        response = self.client.post(reverse('admin:content_user_add'), self.user_form_data(is_admin='on'))
        self.assertEqual(response.status_code, 302)
        self.assertFalse(User.objects.get(email='new@example.com').is_admin)

    def test_password_confirmation_must_match(self):
        self.client.force_login(self.admin)
        response = self.client.post(
            reverse('admin:content_user_add'),
            self.user_form_data(confirm_password='something-else-entirely'),
        )
        self.assertEqual(response.status_code, 200)
        self.assertFalse(User.objects.filter(email='new@example.com').exists())

    def test_save_model_rechecks_field_access(self):
        model_admin = admin.site._registry[User]
        request = RequestFactory().post('/')
        request.user = self.editor
        request.session = {SESSION_KEY: session_payload(self.editor)}

        for change in (False, True):
            for value in (True, False):
                form = SimpleNamespace(cleaned_data={'name': 'Editor', 'is_admin': value})
                with self.assertRaises(FieldAccessDenied):
                    model_admin.save_model(request, self.editor, form, change=change)

        self.editor.refresh_from_db()
        self.assertFalse(self.editor.is_admin)


class ContentAdminTest(AdminTestCase):

    def setUp(self):
        super().setUp()
        self.tag = Tag.objects.create(name='django')
        self.post = Post.objects.create(title='Hello World', description='First post', author=self.editor)
        self.post.tags.add(self.tag)
        self.client.force_login(self.editor)

    def test_post_list_uses_initial_columns(self):
        response = self.client.get(reverse('admin:content_post_changelist'))
        self.assertEqual(response.status_code, 200)
        model_admin = admin.site._registry[Post]
        request = RequestFactory().get('/')
        self.assertEqual(
            model_admin.get_list_display(request),
            ['title', 'description', 'author', 'status', 'publish_date'],
        )
        self.assertContains(response, 'Hello World')

    def test_user_list_renders_posts_column(self):
        response = self.client.get(reverse('admin:content_user_changelist'))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Hello World')

    def test_event_list_renders_hosts_column(self):
        event = Event.objects.create(name='Meetup', about='Monthly')
        event.hosts.add(self.editor)
        response = self.client.get(reverse('admin:content_event_changelist'))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Meetup')

    def test_status_renders_as_segmented_control(self):
        model_admin = admin.site._registry[Post]
        self.assertEqual(model_admin.radio_fields, {'status': admin.HORIZONTAL})

    def test_relationship_widgets_follow_ui_hints(self):
        response = self.client.get(reverse('admin:content_post_change', args=[self.post.pk]))
        self.assertEqual(response.status_code, 200)
        form = response.context['adminform'].form

        author = form.fields['author']
        self.assertTrue(author.widget.can_add_related)
        self.assertTrue(author.widget.can_change_related)
        self.assertEqual(author.label_from_instance(self.editor), 'Editor · editor@example.com')

        tags_widget = form.fields['tags'].widget
        self.assertTrue(tags_widget.can_add_related)
        self.assertEqual(type(tags_widget.widget).__name__, 'AutocompleteSelectMultiple')

    def test_new_post_defaults_to_draft_through_admin(self):
        response = self.client.post(reverse('admin:content_post_add'), {
            'title': 'Draft me',
            'description': '',
            'status': 'draft',
            'content': '<p>Body</p>',
            'publish_date_0': '',
            'publish_date_1': '',
            'author': self.editor.pk,
            'tags': [self.tag.pk],
            '_save': 'Save',
        })
        self.assertEqual(response.status_code, 302)
        post = Post.objects.get(title='Draft me')
        self.assertEqual(post.status, 'draft')
        self.assertEqual(list(post.tags.all()), [self.tag])
