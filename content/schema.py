# content/schema.py

"""
Declarative content schema.

Each list is a named set of typed fields. The Django models in models.py are
the storage side of these declarations; this module carries what the models
cannot express: field access hooks, relationship back-references and admin
display hints. validate_schema() checks that both sides agree.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple, Union

from django.core.exceptions import FieldDoesNotExist, ImproperlyConfigured

from . import access
from .models import EVENT_LAYOUTS, POST_LAYOUTS, STATUS_DRAFT

TEXT = 'text'
PASSWORD = 'password'
CHECKBOX = 'checkbox'
TIMESTAMP = 'timestamp'
SELECT = 'select'
IMAGE = 'image'
DOCUMENT = 'document'
RELATIONSHIP = 'relationship'

FieldMode = Union[str, Callable[..., str]]


class SchemaError(ImproperlyConfigured):
    pass


@dataclass(frozen=True)
class FieldAccess:
    create: Optional[Callable[..., Any]] = None
    update: Optional[Callable[..., Any]] = None


@dataclass(frozen=True)
class FieldUI:
    create_view: Optional[FieldMode] = None
    item_view: Optional[FieldMode] = None
    display_mode: Optional[str] = None


@dataclass(frozen=True)
class RelationshipUI:
    display_mode: str = 'select'
    card_fields: Tuple[str, ...] = ()
    inline_edit: Tuple[str, ...] = ()
    inline_create: Tuple[str, ...] = ()
    inline_connect: bool = False
    link_to_item: bool = False


@dataclass(frozen=True)
class FieldConfig:
    kind: str
    required: bool = False
    is_indexed: Union[bool, str] = False
    is_filterable: bool = False
    default: Any = None
    options: Tuple[Tuple[str, str], ...] = ()
    ref: Optional[str] = None
    many: bool = False
    access: Optional[FieldAccess] = None
    ui: Optional[Union[FieldUI, RelationshipUI]] = None
    document: Dict[str, Any] = field(default_factory=dict)

    @property
    def ref_list(self):
        return self.ref.split('.', 1)[0] if self.ref else None

    @property
    def ref_field(self):
        return self.ref.split('.', 1)[1] if self.ref and '.' in self.ref else None


@dataclass(frozen=True)
class ListConfig:
    model: str
    fields: Dict[str, FieldConfig]
    initial_columns: Tuple[str, ...] = ()


def text(**kwargs):
    return FieldConfig(kind=TEXT, **kwargs)


def relationship(ref, many=False, ui=None):
    return FieldConfig(kind=RELATIONSHIP, ref=ref, many=many, ui=ui)


def document(formatting=False, links=False, dividers=False, layouts=()):
    return FieldConfig(kind=DOCUMENT, document={
        'formatting': formatting,
        'links': links,
        'dividers': dividers,
        'layouts': tuple(tuple(layout) for layout in layouts),
    })


LISTS = {
    'User': ListConfig(
        model='content.User',
        fields={
            'name': text(required=True),
            'email': text(required=True, is_indexed='unique', is_filterable=True),
            'is_admin': FieldConfig(
                kind=CHECKBOX,
                access=FieldAccess(
                    create=access.can_create_is_admin,
                    update=access.can_update_is_admin,
                ),
                ui=FieldUI(
                    create_view=access.create_view_field_mode,
                    item_view=access.item_view_field_mode,
                ),
            ),
            'password': FieldConfig(kind=PASSWORD, required=True),
            'bio': text(),
            'posts': relationship('Post.author', many=True),
            'events': relationship('Event.hosts', many=True),
            'linkedin': text(),
            'github': text(),
            'twitter': text(),
        },
        initial_columns=('name', 'email', 'posts'),
    ),
    'Post': ListConfig(
        model='content.Post',
        fields={
            'title': text(required=True),
            'thumbnail': FieldConfig(kind=IMAGE),
            'description': text(),
            'status': FieldConfig(
                kind=SELECT,
                options=(
                    ('Published', 'published'),
                    ('Under Review', 'review'),
                    ('Draft', 'draft'),
                ),
                default=STATUS_DRAFT,
                ui=FieldUI(display_mode='segmented-control'),
            ),
            'content': document(formatting=True, links=True, dividers=True, layouts=POST_LAYOUTS),
            'publish_date': FieldConfig(kind=TIMESTAMP),
            'author': relationship('User.posts', ui=RelationshipUI(
                display_mode='cards',
                card_fields=('name', 'email'),
                inline_edit=('name', 'email'),
                link_to_item=True,
                inline_create=('name', 'email'),
            )),
            'tags': relationship('Tag.posts', many=True, ui=RelationshipUI(
                display_mode='cards',
                card_fields=('name',),
                inline_edit=('name',),
                link_to_item=True,
                inline_connect=True,
                inline_create=('name',),
            )),
        },
        initial_columns=('title', 'description', 'author', 'status', 'publish_date'),
    ),
    'Tag': ListConfig(
        model='content.Tag',
        fields={
            'name': text(),
            'posts': relationship('Post.tags', many=True),
        },
    ),
    'Event': ListConfig(
        model='content.Event',
        fields={
            'name': text(required=True),
            'date': FieldConfig(kind=TIMESTAMP),
            'hosts': relationship('User.events', many=True, ui=RelationshipUI(
                display_mode='cards',
                card_fields=('name',),
                inline_edit=('name',),
                link_to_item=True,
                inline_connect=True,
                inline_create=('name',),
            )),
            'about': text(required=True),
            'talking_points': document(formatting=True, dividers=True, links=True, layouts=EVENT_LAYOUTS),
            'thumbnail': FieldConfig(kind=IMAGE),
        },
        initial_columns=('name', 'date', 'hosts'),
    ),
}


def list_for_model(model, lists=None):
    """Returns (list_key, ListConfig) for a Django model class."""
    lists = LISTS if lists is None else lists
    label = model._meta.label
    for key, config in lists.items():
        if config.model == label:
            return key, config
    raise SchemaError(f"No list is declared for model {label}")


def validate_schema(lists, resolve_model=None):
    """
    Check a schema for internal consistency.

    Args:
        lists: Mapping of list key to ListConfig
        resolve_model: Optional callable mapping 'app_label.Model' to a model
            class; when given, every declared field must exist on the model

    Returns:
        list: Human readable problems (empty when the schema is valid)
    """
    problems = []

    for list_key, list_config in lists.items():
        model = None
        if resolve_model is not None:
            try:
                model = resolve_model(list_config.model)
            except LookupError:
                problems.append(f"{list_key}: model {list_config.model} is not installed")

        for name, config in list_config.fields.items():
            where = f"{list_key}.{name}"

            if model is not None:
                try:
                    model._meta.get_field(name)
                except FieldDoesNotExist:
                    problems.append(f"{where}: no such field on {list_config.model}")

            if config.kind == SELECT and config.default is not None:
                values = [value for _label, value in config.options]
                if config.default not in values:
                    problems.append(f"{where}: default {config.default!r} is not an option")

            if config.kind != RELATIONSHIP:
                continue

            target_list = lists.get(config.ref_list)
            if target_list is None:
                problems.append(f"{where}: ref {config.ref!r} names an unknown list")
                continue
            target = target_list.fields.get(config.ref_field)
            if target is None or target.kind != RELATIONSHIP:
                problems.append(f"{where}: ref {config.ref!r} names no relationship field")
                continue
            if target.ref != where:
                problems.append(f"{where}: {config.ref} refers back to {target.ref!r}")

        for column in list_config.initial_columns:
            if column not in list_config.fields:
                problems.append(f"{list_key}: initial column {column!r} is not a field")

    return problems


def check_schema(lists=None, resolve_model=None):
    """Raise SchemaError listing every problem found by validate_schema()."""
    problems = validate_schema(LISTS if lists is None else lists, resolve_model)
    if problems:
        raise SchemaError('; '.join(problems))
