# content/management/commands/check_config.py

import os

from django.conf import settings
from django.core.management.base import BaseCommand

from content.schema import LISTS

ENV_VARS = [
    'NODE_ENV', 'SESSION_SECRET',
    'POSTGRES_DB', 'POSTGRES_USER', 'POSTGRES_HOST', 'POSTGRES_PORT',
    'DB_PATH', 'ALLOWED_HOSTS', 'SECURITY_LOG_LEVEL',
]

SECRET_VARS = {'SESSION_SECRET'}


class Command(BaseCommand):
    help = 'Prints the resolved CMS configuration (secrets are masked)'

    def handle(self, *args, **options):
        self.stdout.write('=' * 70)
        self.stdout.write('CMS - Configuration check')
        self.stdout.write('=' * 70)

        self.stdout.write('\n[INFO] Environment:')
        for var in ENV_VARS:
            value = os.environ.get(var)
            if value is None:
                value = 'Not set'
            elif var in SECRET_VARS:
                value = '*' * 20
            self.stdout.write(f'  {var}: {value}')

        strategy = settings.SESSION_STRATEGY
        self.stdout.write('\n[INFO] Sessions:')
        self.stdout.write(f'  ENGINE: {settings.SESSION_ENGINE}')
        self.stdout.write(f'  MAX AGE: {strategy.max_age}s ({strategy.max_age // 86400} days)')
        self.stdout.write(f'  SECURE COOKIE: {strategy.secure}')
        if strategy.uses_placeholder_secret:
            self.stdout.write(self.style.WARNING(
                '  SECRET: development placeholder in use - set SESSION_SECRET before deploying'
            ))
        else:
            self.stdout.write(f"  SECRET: {'*' * 20} ({len(strategy.secret)} characters)")

        db = settings.DATABASES['default']
        self.stdout.write('\n[INFO] Database:')
        self.stdout.write(f"  ENGINE: {db['ENGINE']}")
        self.stdout.write(f"  NAME: {db['NAME']}")

        self.stdout.write('\n[INFO] Lists:')
        for list_key, list_config in LISTS.items():
            self.stdout.write(f"  {list_key}: {', '.join(list_config.fields)}")

        self.stdout.write('\n' + '=' * 70)
        self.stdout.write(self.style.SUCCESS('[OK] Configuration check complete'))
