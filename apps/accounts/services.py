"""
Service layer for accounts app.

Centralized business logic for:
- User registration
- Credential checking with lockout feedback
- Token issuing
"""

import logging

from django.contrib.auth import authenticate, get_user_model
from django.db import transaction
from django.utils import timezone

from apps.core.http import isoformat

from .tokens import issue_token

logger = logging.getLogger(__name__)

User = get_user_model()


class AuthenticationFailed(Exception):
    """Raised when credentials are rejected; message is safe to show."""


def register_user(email: str, password: str):
    """
    Create a user account and return (user, token).

    Args:
        email: Normalized, already-validated email address
        password: Raw password (already checked by password validators)
    """
    with transaction.atomic():
        user = User.objects.create_user(email=email, password=password)

    logger.info(f'User registered: {user.email}')
    return user, issue_token(user)


def login_user(email: str, password: str, request=None):
    """
    Check credentials and return (user, token).

    Raises:
        AuthenticationFailed: On bad credentials or a locked account
    """
    existing = User.objects.filter(email__iexact=email).first()
    if existing is not None and existing.is_locked():
        remaining = (existing.locked_until - timezone.now()).total_seconds()
        minutes = int(remaining // 60) + 1
        logger.warning(f'Login attempt on locked account: {email}')
        raise AuthenticationFailed(
            f'Account is locked. Try again in {minutes} minute(s).'
        )

    user = authenticate(request, username=email, password=password)
    if user is None:
        logger.info(f'Failed login for {email}')
        raise AuthenticationFailed('Invalid email or password')

    logger.info(f'Login successful for {user.email}')
    return user, issue_token(user)


def serialize_user(user, include_created=False):
    data = {'id': user.pk, 'email': user.email}
    if include_created:
        data['createdAt'] = isoformat(user.created_at)
    return data
