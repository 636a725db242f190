"""
Note filters using django-filter.

- tag: exact tag match (?tag=exam)
- q: search across title, content and tag
"""

import django_filters
from django.db.models import Q

from .models import Note


class NoteFilter(django_filters.FilterSet):

    tag = django_filters.CharFilter(field_name='tag', lookup_expr='exact')
    q = django_filters.CharFilter(method='filter_search', label='Search')

    class Meta:
        model = Note
        fields = ['tag', 'q']

    def filter_search(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(title__icontains=value) |
            Q(content__icontains=value) |
            Q(tag__icontains=value)
        )
