"""
Forms for assignments app.

AssignmentForm validates create and update payloads. Reminder tracking
fields are deliberately absent, so the API can never write them.
"""

from django import forms
from django.core.exceptions import ValidationError
from django.utils import timezone

from .models import Assignment


class AssignmentForm(forms.ModelForm):
    """
    Create/update payload: {title, description?, deadline, status?}.

    deadline accepts ISO-8601 strings; naive values are interpreted in
    TIME_ZONE.
    """

    class Meta:
        model = Assignment
        fields = ['title', 'description', 'deadline', 'status']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['status'].required = False
        self.fields['description'].required = False

    def clean_title(self):
        title = (self.cleaned_data.get('title') or '').strip()
        if not title:
            raise ValidationError('Title is required.')
        return title

    def clean_description(self):
        return (self.cleaned_data.get('description') or '').strip()

    def clean_status(self):
        return self.cleaned_data.get('status') or Assignment.Status.PENDING

    def clean_deadline(self):
        """Validate deadline is not in the past for new assignments."""
        deadline = self.cleaned_data.get('deadline')

        if deadline and not self.instance.pk:
            if deadline < timezone.now():
                raise ValidationError('Deadline cannot be in the past.')

        return deadline
