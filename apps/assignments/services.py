"""
Service layer for assignments app.

All business logic for assignment operations is centralized here.

Services:
- get_user_assignment: owner-scoped lookup (404 for others' assignments)
- create_assignment / update_assignment / delete_assignment
- assignment_stats: per-status and deadline counters
- serialize_assignment: JSON representation used by the API
"""

import logging

from django.db import transaction
from django.http import Http404
from django.utils import timezone

from apps.core.cache import invalidate_user_cache
from apps.core.http import isoformat

from .models import Assignment

logger = logging.getLogger(__name__)

CACHE_RESOURCE = 'assignments'

EDITABLE_FIELDS = ['title', 'description', 'deadline', 'status']


def get_user_assignment(user, pk):
    """
    Fetch one of `user`'s assignments.

    Raises:
        Http404: If it does not exist or belongs to someone else
    """
    try:
        return Assignment.objects.for_user(user).get(pk=pk)
    except Assignment.DoesNotExist:
        raise Http404('Assignment not found')


def create_assignment(
    user,
    title: str,
    deadline,
    description: str = '',
    status: str = Assignment.Status.PENDING,
):
    """
    Create an assignment owned by `user`.

    Args:
        user: Owner (required)
        title: Assignment title (required, already stripped)
        deadline: Aware datetime when the assignment is due
        description: Optional free text
        status: pending / in-progress / completed (default: pending)
    """
    with transaction.atomic():
        assignment = Assignment.objects.create(
            user=user,
            title=title,
            description=description or '',
            deadline=deadline,
            status=status or Assignment.Status.PENDING,
        )

    invalidate_user_cache(CACHE_RESOURCE, user)
    logger.info(f'Assignment {assignment.pk} created for user {user.pk}: "{assignment.title}"')
    return assignment


def update_assignment(assignment, user, **kwargs):
    """
    Update editable fields of an assignment.

    Reminder tracking fields are not editable here; changing the deadline
    of an already-reminded assignment does not re-arm its reminder.
    """
    changed = []
    for field in EDITABLE_FIELDS:
        if field in kwargs:
            setattr(assignment, field, kwargs[field])
            changed.append(field)

    if changed:
        with transaction.atomic():
            assignment.save(update_fields=changed + ['updated_at'])
        invalidate_user_cache(CACHE_RESOURCE, user)
        logger.info(f'Assignment {assignment.pk} updated: {", ".join(changed)}')

    return assignment


def delete_assignment(assignment, user):
    pk = assignment.pk
    assignment.delete()
    invalidate_user_cache(CACHE_RESOURCE, user)
    logger.info(f'Assignment {pk} deleted by user {user.pk}')


def assignment_stats(user, now=None):
    """
    Counters for the dashboard.

    Returns:
        dict with total, pending, in_progress, completed, overdue,
        due_tomorrow
    """
    now = now or timezone.now()
    queryset = Assignment.objects.for_user(user)

    return {
        'total': queryset.count(),
        'pending': queryset.filter(status=Assignment.Status.PENDING).count(),
        'in_progress': queryset.filter(status=Assignment.Status.IN_PROGRESS).count(),
        'completed': queryset.filter(status=Assignment.Status.COMPLETED).count(),
        'overdue': queryset.overdue(now).count(),
        'due_tomorrow': queryset.open().due_on_day(now, days_ahead=1).count(),
    }


def serialize_assignment(assignment):
    return {
        'id': assignment.pk,
        'title': assignment.title,
        'description': assignment.description,
        'deadline': isoformat(assignment.deadline),
        'status': assignment.status,
        'userId': assignment.user_id,
        'createdAt': isoformat(assignment.created_at),
        'updatedAt': isoformat(assignment.updated_at),
        'reminderSent': assignment.reminder_sent,
        'reminderSentAt': isoformat(assignment.reminder_sent_at),
    }
