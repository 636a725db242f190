"""
Forms for accounts app.

Used to validate JSON payloads of the auth API:
- RegisterForm: email uniqueness + Django password validators
- LoginForm: presence/shape of credentials only (checking them is the
  service layer's job)
"""

from django import forms
from django.contrib.auth import get_user_model, password_validation
from django.core.exceptions import ValidationError

User = get_user_model()


class RegisterForm(forms.Form):
    """Registration payload: {email, password}."""

    email = forms.EmailField(max_length=254)
    password = forms.CharField(strip=False, max_length=128)

    def clean_email(self):
        """Normalize and reject emails that are already registered."""
        email = self.cleaned_data.get('email', '').lower().strip()
        if User.objects.filter(email__iexact=email).exists():
            raise ValidationError(
                'User with this email already exists.',
                code='duplicate_email',
            )
        return email

    def clean(self):
        """Run AUTH_PASSWORD_VALIDATORS against the would-be user."""
        cleaned_data = super().clean()
        email = cleaned_data.get('email')
        password = cleaned_data.get('password')

        if password:
            try:
                password_validation.validate_password(
                    password,
                    user=User(email=email or ''),
                )
            except ValidationError as e:
                self.add_error('password', e)

        return cleaned_data


class LoginForm(forms.Form):
    """Login payload: {email, password}."""

    email = forms.EmailField(max_length=254)
    password = forms.CharField(strip=False, max_length=128)

    def clean_email(self):
        return self.cleaned_data.get('email', '').lower().strip()
