# content/checks.py

from django.apps import apps
from django.core import checks

from .schema import LISTS, validate_schema


@checks.register()
def check_content_schema(app_configs=None, **kwargs):
    """Report schema declarations that do not match each other or the models."""
    return [
        checks.Error(problem, obj='content.schema', id='content.E001')
        for problem in validate_schema(LISTS, resolve_model=apps.get_model)
    ]
