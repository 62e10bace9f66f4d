# content/management/commands/init_first_item.py

import getpass

from django.contrib.auth import get_user_model, password_validation
from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError

from content.auth import FirstItemExists, create_first_item


class Command(BaseCommand):
    help = 'Creates the first (admin) user when the User list is empty'

    def add_arguments(self, parser):
        parser.add_argument('--email', required=True, help='Login email of the first user')
        parser.add_argument('--name', required=True, help='Display name of the first user')
        parser.add_argument(
            '--password',
            help='Password (prompted for when omitted)',
        )

    def handle(self, *args, **options):
        UserModel = get_user_model()

        if UserModel.objects.exists():
            raise CommandError('Users already exist; the first user can only be created on an empty database.')

        password = options['password'] or getpass.getpass('Password: ')
        user = UserModel(
            email=UserModel.objects.normalize_email(options['email']),
            name=options['name'],
        )

        try:
            password_validation.validate_password(password, user)
        except ValidationError as e:
            raise CommandError('; '.join(e.messages))
        user.set_password(password)

        try:
            create_first_item(user)
        except FirstItemExists as e:
            raise CommandError(str(e))

        self.stdout.write(self.style.SUCCESS(f'✓ Created admin user {user.email}'))
