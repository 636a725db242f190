"""
Note models.

Models:
- Note: a study note with optional reference link and tag
"""

from django.conf import settings
from django.db import models


class NoteQuerySet(models.QuerySet):

    def for_user(self, user):
        return self.filter(user=user)


class Note(models.Model):
    """
    A student's note.

    The tag is a free-form short label used for grouping and filtering
    ("exam", "lecture-3", ...). Empty string means untagged.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='notes',
    )
    title = models.CharField(max_length=255)
    content = models.TextField()
    link = models.URLField(max_length=500, blank=True, default='')
    tag = models.CharField(max_length=50, blank=True, default='', db_index=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = NoteQuerySet.as_manager()

    class Meta:
        verbose_name = 'note'
        verbose_name_plural = 'notes'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'tag'], name='note_user_tag_idx'),
        ]

    def __str__(self):
        return self.title
