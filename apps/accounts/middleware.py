"""
JWT authentication middleware for the JSON API.

Reads `Authorization: Bearer <token>`, verifies it and attaches the user:
- request.jwt_user: the authenticated User, or None
- request.jwt_error: (status, message) describing why a presented token
  was rejected, or None
- request.user: replaced by the token's user when the token is valid

Requests without a bearer token pass through untouched (the admin keeps
its session authentication). Enforcement is left to @jwt_required so that
public endpoints such as login and register keep working.
"""

import logging

import jwt
from django.contrib.auth import get_user_model

from .tokens import decode_token

logger = logging.getLogger(__name__)

User = get_user_model()


def get_bearer_token(request):
    """Return the bearer token from the Authorization header, or None."""
    auth_header = request.headers.get('Authorization', '')
    if not auth_header.startswith('Bearer '):
        return None
    token = auth_header[len('Bearer '):].strip()
    return token or None


class JWTAuthenticationMiddleware:
    """
    Attach the user identified by a bearer token.

    Rejections (recorded in request.jwt_error):
    - expired token: 403 "Token expired"
    - bad signature / malformed token: 403 "Invalid token"
    - unknown or inactive user: 401 "Invalid token: user not found"
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.jwt_user = None
        request.jwt_error = None

        token = get_bearer_token(request)
        if token is not None:
            self._authenticate(request, token)

        return self.get_response(request)

    def _authenticate(self, request, token):
        try:
            payload = decode_token(token)
        except jwt.ExpiredSignatureError:
            logger.info('Rejected expired token')
            request.jwt_error = (403, 'Token expired')
            return
        except jwt.InvalidTokenError as e:
            logger.info(f'Rejected invalid token: {e}')
            request.jwt_error = (403, 'Invalid token')
            return

        try:
            user = User.objects.get(pk=payload['user_id'], is_active=True)
        except (User.DoesNotExist, ValueError, TypeError):
            logger.info(f"No active user for token user_id={payload['user_id']}")
            request.jwt_error = (401, 'Invalid token: user not found')
            return

        request.jwt_user = user
        request.user = user
