"""
Forms for notes app.
"""

from django import forms
from django.core.exceptions import ValidationError

from .models import Note


class NoteForm(forms.ModelForm):
    """Create/update payload: {title, content, link?, tag?}."""

    class Meta:
        model = Note
        fields = ['title', 'content', 'link', 'tag']
        error_messages = {
            'link': {'invalid': 'Invalid URL'},
        }

    def clean_title(self):
        title = (self.cleaned_data.get('title') or '').strip()
        if not title:
            raise ValidationError('Title is required')
        return title

    def clean_content(self):
        content = (self.cleaned_data.get('content') or '').strip()
        if not content:
            raise ValidationError('Content is required')
        return content

    def clean_tag(self):
        return (self.cleaned_data.get('tag') or '').strip()
