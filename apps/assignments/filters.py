"""
Assignment filters using django-filter.

Provides filtering for the assignment list endpoint:
- Status filter (multi-select: ?status=pending&status=in-progress)
- Deadline filter (today, tomorrow, this week, overdue)
- Search (title, description)
"""

from datetime import timedelta

import django_filters
from django.db.models import Q
from django.utils import timezone

from .models import Assignment, calendar_day_window


class AssignmentFilter(django_filters.FilterSet):
    """
    Usage in views:
        filterset = AssignmentFilter(request.GET, queryset=queryset)
        assignments = filterset.qs
    """

    search = django_filters.CharFilter(method='filter_search', label='Search')

    status = django_filters.MultipleChoiceFilter(
        choices=Assignment.Status.choices,
        label='Status',
    )

    due = django_filters.ChoiceFilter(
        method='filter_due',
        choices=[
            ('today', 'Due Today'),
            ('tomorrow', 'Due Tomorrow'),
            ('this_week', 'Due This Week'),
            ('overdue', 'Overdue'),
        ],
        label='Deadline',
    )

    class Meta:
        model = Assignment
        fields = ['search', 'status', 'due']

    def filter_search(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(title__icontains=value) |
            Q(description__icontains=value)
        )

    def filter_due(self, queryset, name, value):
        now = timezone.now()

        if value == 'today':
            return queryset.due_on_day(now, days_ahead=0)

        if value == 'tomorrow':
            return queryset.due_on_day(now, days_ahead=1)

        if value == 'this_week':
            # Today through the coming Sunday, local time
            start, _ = calendar_day_window(now, days_ahead=0)
            days_to_sunday = 6 - timezone.localtime(now).weekday()
            return queryset.due_between(start, start + timedelta(days=days_to_sunday + 1))

        if value == 'overdue':
            return queryset.overdue(now)

        return queryset
