# content/admin.py

"""
Admin interface for the CMS lists.

Display hints come from content/schema.py: list columns, segmented select
controls and relationship widgets. Field modes computed from the session
only shape the forms; save_model() re-checks field access on every write.
"""

from django.contrib import admin
from django.contrib.admin.widgets import RelatedFieldWidgetWrapper

from .access import CREATE_VIEW, FIELD_MODE_HIDDEN, FIELD_MODE_READ, ITEM_VIEW, check_field_access, field_mode
from .auth import claims_from_request
from .forms import UserChangeForm, UserCreateForm
from .models import Event, Post, Tag, User
from .schema import RELATIONSHIP, SELECT, list_for_model

admin.site.site_header = 'CMS Admin'
admin.site.site_title = 'CMS Admin'


def many_column(field_name, label):
    """List column rendering a to-many relationship as comma separated labels."""
    @admin.display(description=label)
    def column(obj):
        return ', '.join(str(item) for item in getattr(obj, field_name).all())

    column.__name__ = f'{field_name}_column'
    return column


def card_label(card_fields):
    def label_from_instance(obj):
        return ' · '.join(str(getattr(obj, name)) for name in card_fields if getattr(obj, name, ''))
    return label_from_instance


class SchemaModelAdmin(admin.ModelAdmin):
    """ModelAdmin configured from the list declaration of its model."""

    def __init__(self, model, admin_site):
        super().__init__(model, admin_site)
        self.list_key, self.list_config = list_for_model(model)
        self.radio_fields = {
            name: admin.HORIZONTAL
            for name, config in self.list_config.fields.items()
            if config.kind == SELECT and getattr(config.ui, 'display_mode', None) == 'segmented-control'
        }

    def get_list_display(self, request):
        if not self.list_config.initial_columns:
            return super().get_list_display(request)
        columns = []
        for name in self.list_config.initial_columns:
            config = self.list_config.fields[name]
            if config.kind == RELATIONSHIP and config.many:
                columns.append(many_column(name, name.replace('_', ' ')))
            else:
                columns.append(name)
        return columns

    def get_autocomplete_fields(self, request):
        return [
            name for name, config in self.list_config.fields.items()
            if config.kind == RELATIONSHIP and getattr(config.ui, 'inline_connect', False)
        ]

    def formfield_for_dbfield(self, db_field, request, **kwargs):
        formfield = super().formfield_for_dbfield(db_field, request, **kwargs)
        config = self.list_config.fields.get(db_field.name)
        if formfield is None or config is None or config.ui is None or config.kind != RELATIONSHIP:
            return formfield

        ui = config.ui
        if ui.card_fields and hasattr(formfield, 'label_from_instance'):
            formfield.label_from_instance = card_label(ui.card_fields)
        if isinstance(formfield.widget, RelatedFieldWidgetWrapper):
            widget = formfield.widget
            widget.can_add_related = widget.can_add_related and bool(ui.inline_create)
            widget.can_change_related = widget.can_change_related and bool(ui.inline_edit)
            widget.can_view_related = widget.can_view_related and ui.link_to_item
        return formfield

    def save_model(self, request, obj, form, change):
        check_field_access(
            self.list_key,
            'update' if change else 'create',
            form.cleaned_data,
            claims_from_request(request),
        )
        super().save_model(request, obj, form, change)


@admin.register(User)
class UserAdmin(SchemaModelAdmin):
    form = UserChangeForm
    add_form = UserCreateForm
    search_fields = ('name', 'email')
    list_filter = ('is_admin',)

    profile_fields = ('name', 'email', 'is_admin')
    detail_fields = ('bio', 'linkedin', 'github', 'twitter')

    def _field_modes(self, request, obj):
        view = CREATE_VIEW if obj is None else ITEM_VIEW
        claims = claims_from_request(request)
        return {
            name: field_mode(self.list_key, name, view, claims)
            for name in self.profile_fields + self.detail_fields
        }

    def get_fieldsets(self, request, obj=None):
        modes = self._field_modes(request, obj)
        visible = lambda names: [name for name in names if modes[name] != FIELD_MODE_HIDDEN]
        return [
            (None, {'fields': visible(self.profile_fields)}),
            ('Password', {'fields': ['new_password', 'confirm_password']}),
            ('Profile', {'fields': visible(self.detail_fields)}),
        ]

    def get_readonly_fields(self, request, obj=None):
        modes = self._field_modes(request, obj)
        return [name for name, mode in modes.items() if mode == FIELD_MODE_READ]

    def get_form(self, request, obj=None, **kwargs):
        defaults = {}
        if obj is None:
            defaults['form'] = self.add_form
        defaults.update(kwargs)
        return super().get_form(request, obj, **defaults)


@admin.register(Post)
class PostAdmin(SchemaModelAdmin):
    search_fields = ('title', 'description')
    list_filter = ('status', 'publish_date')
    date_hierarchy = 'publish_date'


@admin.register(Tag)
class TagAdmin(SchemaModelAdmin):
    search_fields = ('name',)


@admin.register(Event)
class EventAdmin(SchemaModelAdmin):
    search_fields = ('name', 'about')
    list_filter = ('date',)
