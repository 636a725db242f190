"""
Shared helpers for the test suite.
"""

from datetime import datetime, timedelta, timezone as dt_timezone

from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.test import TestCase

from apps.accounts.tokens import issue_token
from apps.assignments.models import Assignment

User = get_user_model()

PASSWORD = 'Corr3ct-Horse-Battery'

# A fixed "now" for pipeline tests: Tuesday 2025-06-10 15:00 UTC
NOW = datetime(2025, 6, 10, 15, 0, tzinfo=dt_timezone.utc)
TOMORROW_START = datetime(2025, 6, 11, 0, 0, tzinfo=dt_timezone.utc)


def create_user(email='student@example.com', password=PASSWORD, **extra):
    return User.objects.create_user(email=email, password=password, **extra)


def create_assignment(user, deadline, title='Essay', created_at=None, **extra):
    """
    Create an assignment; created_at defaults to three days before the
    deadline (auto_now_add is bypassed with an update).
    """
    assignment = Assignment.objects.create(user=user, title=title, deadline=deadline, **extra)
    created_at = created_at or deadline - timedelta(days=3)
    Assignment.objects.filter(pk=assignment.pk).update(created_at=created_at)
    assignment.refresh_from_db()
    return assignment


class APITestCase(TestCase):
    """TestCase with JWT-authenticated JSON helpers."""

    def setUp(self):
        # Primary keys are reused between tests; stale cached responses must not leak
        cache.clear()
        self.user = create_user()

    def auth_headers(self, user=None):
        return {'HTTP_AUTHORIZATION': f'Bearer {issue_token(user or self.user)}'}

    def get_json(self, url, user=None, **params):
        return self.client.get(url, params, **self.auth_headers(user))

    def send_json(self, method, url, data=None, user=None):
        handler = getattr(self.client, method)
        return handler(url, data or {}, content_type='application/json', **self.auth_headers(user))
