"""
Document (rich text) field.

Documents are stored as HTML. Each field is configured with the editing
features it supports (formatting, links, dividers, column layouts) and every
value is passed through bleach on save so that only markup belonging to an
enabled feature is kept.
"""

import logging

import bleach
from django import forms
from django.db import models

logger = logging.getLogger(__name__)

BASE_TAGS = {'p', 'br'}

FORMATTING_TAGS = {
    'strong', 'em', 'u', 's', 'code', 'sub', 'sup', 'kbd',
    'h1', 'h2', 'h3', 'h4', 'h5', 'h6',
    'ul', 'ol', 'li', 'blockquote', 'pre',
}

LINK_PROTOCOLS = {'http', 'https', 'mailto'}


def layout_key(layout):
    """Returns the data-layout attribute value for a column layout, e.g. (1, 2) -> '1,2'."""
    return ','.join(str(column) for column in layout)


class DocumentSanitizer:
    """
    Bleach-based cleaner built from a document field configuration.

    Layout blocks are written as ``<div data-layout="1,1">``; a data-layout
    value that is not one of the configured layouts is dropped.
    """

    def __init__(self, formatting=False, links=False, dividers=False, layouts=()):
        self.tags = set(BASE_TAGS)
        self.attributes = {}

        if formatting:
            self.tags |= FORMATTING_TAGS
        if links:
            self.tags.add('a')
            self.attributes['a'] = ['href', 'title']
        if dividers:
            self.tags.add('hr')
        if layouts:
            self.tags.add('div')
            self.allowed_layouts = frozenset(layout_key(layout) for layout in layouts)
            self.attributes['div'] = self._allow_layout_attribute
        else:
            self.allowed_layouts = frozenset()

        self.tags = frozenset(self.tags)

    def _allow_layout_attribute(self, tag, name, value):
        return name == 'data-layout' and value in self.allowed_layouts

    def clean(self, value):
        if not value:
            return value
        cleaned = bleach.clean(
            value,
            tags=self.tags,
            attributes=self.attributes,
            protocols=LINK_PROTOCOLS,
            strip=True,
        )
        if cleaned != value:
            logger.debug("Document markup outside the field configuration was removed")
        return cleaned


class DocumentField(models.TextField):
    """TextField holding sanitized rich text."""

    description = "Rich text document"

    def __init__(self, *args, formatting=False, links=False, dividers=False, layouts=(), **kwargs):
        self.formatting = formatting
        self.links = links
        self.dividers = dividers
        self.layouts = [list(layout) for layout in layouts]
        kwargs.setdefault('blank', True)
        super().__init__(*args, **kwargs)

    @property
    def sanitizer(self):
        return DocumentSanitizer(
            formatting=self.formatting,
            links=self.links,
            dividers=self.dividers,
            layouts=self.layouts,
        )

    def deconstruct(self):
        name, path, args, kwargs = super().deconstruct()
        if kwargs.get('blank') is True:
            del kwargs['blank']
        for option in ('formatting', 'links', 'dividers'):
            if getattr(self, option):
                kwargs[option] = True
        if self.layouts:
            kwargs['layouts'] = self.layouts
        return name, path, args, kwargs

    def pre_save(self, model_instance, add):
        value = self.sanitizer.clean(getattr(model_instance, self.attname))
        setattr(model_instance, self.attname, value)
        return value

    def formfield(self, **kwargs):
        defaults = {'widget': forms.Textarea(attrs={'rows': 12, 'class': 'vLargeTextField document-editor'})}
        defaults.update(kwargs)
        return super().formfield(**defaults)
