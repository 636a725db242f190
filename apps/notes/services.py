"""
Service layer for notes app.

Services:
- get_user_note: owner-scoped lookup (404 for others' notes)
- create_note / update_note / delete_note
- note_stats: totals per tag
- serialize_note: JSON representation used by the API
"""

import logging

from django.db.models import Count
from django.http import Http404

from apps.core.cache import invalidate_user_cache
from apps.core.http import isoformat

from .models import Note

logger = logging.getLogger(__name__)

CACHE_RESOURCE = 'notes'

EDITABLE_FIELDS = ['title', 'content', 'link', 'tag']


def get_user_note(user, pk):
    try:
        return Note.objects.for_user(user).get(pk=pk)
    except Note.DoesNotExist:
        raise Http404('Note not found')


def create_note(user, title: str, content: str, link: str = '', tag: str = ''):
    note = Note.objects.create(
        user=user,
        title=title,
        content=content,
        link=link or '',
        tag=tag or '',
    )
    invalidate_user_cache(CACHE_RESOURCE, user)
    logger.info(f'Note {note.pk} created for user {user.pk}')
    return note


def update_note(note, user, **kwargs):
    changed = [field for field in EDITABLE_FIELDS if field in kwargs]
    for field in changed:
        setattr(note, field, kwargs[field] or '')

    if changed:
        note.save(update_fields=changed + ['updated_at'])
        invalidate_user_cache(CACHE_RESOURCE, user)
        logger.info(f'Note {note.pk} updated: {", ".join(changed)}')

    return note


def delete_note(note, user):
    pk = note.pk
    note.delete()
    invalidate_user_cache(CACHE_RESOURCE, user)
    logger.info(f'Note {pk} deleted by user {user.pk}')


def note_stats(user):
    """
    Returns:
        dict with total, untagged, and tags: {tag: count}
    """
    queryset = Note.objects.for_user(user)
    tag_counts = (
        queryset.exclude(tag='')
        .values('tag')
        .annotate(count=Count('id'))
        .order_by('tag')
    )
    return {
        'total': queryset.count(),
        'untagged': queryset.filter(tag='').count(),
        'tags': {row['tag']: row['count'] for row in tag_counts},
    }


def serialize_note(note):
    return {
        'id': note.pk,
        'title': note.title,
        'content': note.content,
        'link': note.link or None,
        'tag': note.tag or None,
        'userId': note.user_id,
        'createdAt': isoformat(note.created_at),
        'updatedAt': isoformat(note.updated_at),
    }
