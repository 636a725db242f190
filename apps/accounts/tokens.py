"""
JWT issuing and verification for the API.

Tokens are HS256-signed with settings.JWT_SECRET and carry:
- user_id: primary key of the authenticated user
- iat: issued-at timestamp
- exp: expiry (settings.JWT_EXPIRES_IN_HOURS after issue)
"""

from datetime import timedelta

import jwt
from django.conf import settings
from django.utils import timezone


def issue_token(user, now=None):
    """Return a signed access token for `user`."""
    issued_at = now or timezone.now()
    expires_in = timedelta(hours=getattr(settings, 'JWT_EXPIRES_IN_HOURS', 24))
    payload = {
        'user_id': user.pk,
        'iat': issued_at,
        'exp': issued_at + expires_in,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token):
    """
    Verify a token and return its payload.

    Raises:
        jwt.ExpiredSignatureError: If the token has expired
        jwt.InvalidTokenError: If the token is malformed, tampered with,
            or lacks a user_id claim
    """
    payload = jwt.decode(
        token,
        settings.JWT_SECRET,
        algorithms=[settings.JWT_ALGORITHM],
        options={'require': ['exp', 'iat']},
    )
    if 'user_id' not in payload:
        raise jwt.InvalidTokenError('Token has no user_id claim')
    return payload
