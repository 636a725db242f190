"""
Views for core app.

- Health check
- JSON 404 / 500 handlers (wired as handler404 / handler500)
"""

import logging

from django.conf import settings
from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_GET

from .http import isoformat

logger = logging.getLogger(__name__)


@require_GET
def health_check(request):
    return JsonResponse({
        'status': 'ok',
        'timestamp': isoformat(timezone.now()),
        'environment': getattr(settings, 'ENVIRONMENT', 'development'),
    })


def not_found(request, exception=None):
    return JsonResponse({'error': 'Route not found'}, status=404)


def server_error(request):
    logger.error(f'Unhandled error on {request.method} {request.path}')
    return JsonResponse({'error': 'Internal server error'}, status=500)
