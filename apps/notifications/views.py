"""
Views for notifications app (JSON API, mounted at /api/).

- trigger-reminders/: run the deadline reminder check now
- reminders/status/: email transport health
- reminders/test/: send a sample reminder to the caller
"""

import logging

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from apps.accounts.decorators import jwt_required

from .reminders import get_reminder_service

logger = logging.getLogger(__name__)


@csrf_exempt
@require_POST
@jwt_required
def trigger_reminders(request):
    logger.info(f'Manual reminder check triggered by user {request.user.pk}')
    result = get_reminder_service().run_manual_check()
    return JsonResponse({'message': 'Reminder check completed', **result})


@require_GET
@jwt_required
def reminder_status(request):
    notifier = get_reminder_service().notifier
    configured = notifier.is_configured()
    return JsonResponse({
        'email_configured': configured,
        'connection_ok': configured and notifier.test_connection(),
    })


@csrf_exempt
@require_POST
@jwt_required
def send_test_reminder(request):
    notifier = get_reminder_service().notifier
    return JsonResponse({'sent': notifier.send_test_reminder(request.user.email)})
