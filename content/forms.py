# content/forms.py

from django import forms
from django.contrib.auth import password_validation
from django.utils.translation import gettext_lazy as _

from .auth import AUTH_CONFIG
from .models import User


class PasswordFieldsMixin:
    """Adds password/confirm_password handling to a user ModelForm."""

    password_required = True

    def clean(self):
        cleaned_data = super().clean()
        password = cleaned_data.get('new_password')
        confirm_password = cleaned_data.get('confirm_password')

        if password or confirm_password:
            if password != confirm_password:
                self.add_error('confirm_password', _("Passwords don't match."))
            else:
                try:
                    password_validation.validate_password(password, self.instance)
                except forms.ValidationError as error:
                    self.add_error('new_password', error)
        elif self.password_required:
            self.add_error('new_password', _("A password is required."))

        return cleaned_data

    def save(self, commit=True):
        user = super().save(commit=False)
        password = self.cleaned_data.get('new_password')
        if password:
            user.set_password(password)
        if commit:
            user.save()
            self.save_m2m()
        return user


class UserCreateForm(PasswordFieldsMixin, forms.ModelForm):
    """Admin form for new users; the password is stored hashed."""

    new_password = forms.CharField(
        label=_('Password'),
        strip=False,
        widget=forms.PasswordInput(attrs={'autocomplete': 'new-password'}),
    )
    confirm_password = forms.CharField(
        label=_('Confirm Password'),
        strip=False,
        widget=forms.PasswordInput(attrs={'autocomplete': 'new-password'}),
    )

    class Meta:
        model = User
        fields = ('name', 'email')


class UserChangeForm(PasswordFieldsMixin, forms.ModelForm):
    """Admin form for existing users; leave the password blank to keep it."""

    password_required = False

    new_password = forms.CharField(
        label=_('New password'),
        required=False,
        strip=False,
        widget=forms.PasswordInput(attrs={'autocomplete': 'new-password'}),
    )
    confirm_password = forms.CharField(
        label=_('Confirm new password'),
        required=False,
        strip=False,
        widget=forms.PasswordInput(attrs={'autocomplete': 'new-password'}),
    )

    class Meta:
        model = User
        fields = ('name', 'email')


class InitFirstItemForm(PasswordFieldsMixin, forms.ModelForm):
    """
    Form shown while the User list is empty.

    Asks for the configured init fields except the secret and those forced by
    the item data; see auth.create_first_item().
    """

    new_password = forms.CharField(
        label=_('Password'),
        strip=False,
        widget=forms.PasswordInput(attrs={'placeholder': _('Create a password')}),
    )
    confirm_password = forms.CharField(
        label=_('Confirm Password'),
        strip=False,
        widget=forms.PasswordInput(attrs={'placeholder': _('Confirm your password')}),
    )

    class Meta:
        model = User
        fields = [
            name for name in AUTH_CONFIG.init_first_item.fields
            if name not in AUTH_CONFIG.init_first_item.item_data
            and name != AUTH_CONFIG.secret_field
        ]

