"""
Email notifier for deadline reminders.

Messages are rendered from templates (plain text + HTML alternative) and
sent through Django's mail framework, so the transport is whatever
EMAIL_BACKEND names. Delivery problems are logged and reported as False;
nothing here raises.
"""

import logging
from datetime import timedelta

from django.conf import settings
from django.core.mail import EmailMultiAlternatives, get_connection
from django.template.loader import render_to_string
from django.utils import timezone

logger = logging.getLogger(__name__)

SMTP_BACKEND = 'django.core.mail.backends.smtp.EmailBackend'


def format_deadline(deadline):
    """e.g. 'Wednesday, June 11, 2025 at 09:00 AM' in the current time zone."""
    local = timezone.localtime(deadline)
    return f'{local:%A, %B} {local.day}, {local:%Y} at {local:%I:%M %p}'


class EmailNotifier:
    """
    Sends deadline reminder emails.

    Settings are read on every call so they can change at runtime
    (override_settings in tests, environment reloads).
    """

    subject_template = 'Deadline Reminder: {title}'
    template_name = 'notifications/emails/deadline_reminder'

    def is_configured(self):
        """SMTP needs host and credentials; any other backend is usable as is."""
        if settings.EMAIL_BACKEND != SMTP_BACKEND:
            return True
        return all([
            settings.EMAIL_HOST,
            settings.EMAIL_HOST_USER,
            settings.EMAIL_HOST_PASSWORD,
        ])

    def build_message(self, to_email, title, deadline, connection=None):
        context = {
            'title': title,
            'deadline': deadline,
            'deadline_display': format_deadline(deadline),
        }
        text_content = render_to_string(f'{self.template_name}.txt', context)
        html_content = render_to_string(f'{self.template_name}.html', context)

        message = EmailMultiAlternatives(
            subject=self.subject_template.format(title=title),
            body=text_content,
            from_email=settings.DEFAULT_FROM_EMAIL,
            to=[to_email],
            connection=connection,
        )
        message.attach_alternative(html_content, 'text/html')
        return message

    def send_deadline_reminder(self, to_email, title, deadline):
        """
        Returns:
            bool: True if the message was handed to the transport
        """
        if not self.is_configured():
            logger.warning(f'Email transport not configured; reminder to {to_email} not sent')
            return False

        try:
            message = self.build_message(to_email, title, deadline)
            message.send(fail_silently=False)
        except Exception as e:
            logger.error(f'Failed to send deadline reminder to {to_email}: {e}')
            return False

        logger.debug(f'Deadline reminder for "{title}" sent to {to_email}')
        return True

    def test_connection(self):
        """Open and close a transport connection."""
        if not self.is_configured():
            logger.warning('Email transport not configured')
            return False

        try:
            connection = get_connection(fail_silently=False)
            connection.open()
            connection.close()
        except Exception as e:
            logger.error(f'Email connection test failed: {e}')
            return False

        return True

    def send_test_reminder(self, to_email):
        """Send a sample reminder for a 'Test Assignment' due 24 hours from now."""
        deadline = timezone.now() + timedelta(hours=24)
        return self.send_deadline_reminder(to_email, 'Test Assignment', deadline)
