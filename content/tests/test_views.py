from django.test import TestCase
from django.urls import reverse

from content.auth import SESSION_KEY
from content.models import User

PASSWORD = 'Str0ng-passphrase!'


class InitFirstItemMiddlewareTest(TestCase):

    def test_requests_redirect_to_init_while_no_users_exist(self):
        for url in (reverse('admin:index'), reverse('admin:login'), reverse('session')):
            with self.subTest(url=url):
                response = self.client.get(url)
                self.assertRedirects(response, reverse('init_first_item'), fetch_redirect_response=False)

    def test_init_page_is_reachable(self):
        response = self.client.get(reverse('init_first_item'))
        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, 'content/init_first_item.html')

    def test_no_redirect_once_a_user_exists(self):
        User.objects.create_user(email='first@example.com', password=PASSWORD, name='First')
        response = self.client.get(reverse('admin:login'))
        self.assertEqual(response.status_code, 200)


class InitFirstItemViewTest(TestCase):

    def post_first_item(self, **overrides):
        data = {
            'name': 'First',
            'email': 'first@example.com',
            'new_password': PASSWORD,
            'confirm_password': PASSWORD,
        }
        data.update(overrides)
        return self.client.post(reverse('init_first_item'), data)

    def test_form_asks_for_configured_fields(self):
        response = self.client.get(reverse('init_first_item'))
        form = response.context['form']
        self.assertEqual(list(form.fields), ['name', 'email', 'new_password', 'confirm_password'])

    def test_creates_admin_and_logs_in(self):
        response = self.post_first_item()
        self.assertRedirects(response, reverse('admin:index'), fetch_redirect_response=False)

        user = User.objects.get(email='first@example.com')
        self.assertTrue(user.is_admin)
        self.assertTrue(user.check_password(PASSWORD))
        self.assertEqual(
            self.client.session[SESSION_KEY]['data'],
            {'name': 'First', 'is_admin': True},
        )

    def test_invalid_form_is_redisplayed(self):
        response = self.post_first_item(confirm_password='nope-not-the-same')
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.context['form'].errors)
        self.assertFalse(User.objects.exists())

    def test_weak_passwords_are_rejected(self):
        response = self.post_first_item(new_password='short', confirm_password='short')
        self.assertEqual(response.status_code, 200)
        self.assertIn('new_password', response.context['form'].errors)

    def test_redirects_when_users_exist(self):
        User.objects.create_user(email='someone@example.com', password=PASSWORD, name='Someone')
        response = self.post_first_item()
        self.assertRedirects(response, reverse('admin:login'), fetch_redirect_response=False)
        self.assertFalse(User.objects.filter(email='first@example.com').exists())
