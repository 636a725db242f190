"""
Request logging middleware.

Logs one line per request: method, path, status and duration.
"""

import logging
import time

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware:
    """Log every request after the response is produced."""

    # Paths that would only add noise
    EXEMPT_PATH_PREFIXES = [
        '/static/',
        '/__debug__/',
    ]

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if any(request.path.startswith(prefix) for prefix in self.EXEMPT_PATH_PREFIXES):
            return self.get_response(request)

        started = time.monotonic()
        response = self.get_response(request)
        elapsed_ms = (time.monotonic() - started) * 1000

        user = getattr(request, 'user', None)
        user_label = user.pk if user is not None and user.is_authenticated else 'anonymous'
        logger.info(
            f'{request.method} {request.path} -> {response.status_code} '
            f'({elapsed_ms:.1f} ms, user={user_label})'
        )
        return response
