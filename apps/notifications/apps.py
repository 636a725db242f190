from datetime import timedelta

from django.apps import AppConfig
from django.conf import settings
from django.utils import timezone


class NotificationsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.notifications'
    verbose_name = 'Notifications'

    reminder_service = None

    def ready(self):
        """Build the deadline reminder pipeline once per process."""
        from .reminders import AssignmentReminderStore, ReminderService
        from .services import EmailNotifier

        self.reminder_service = ReminderService(
            store=AssignmentReminderStore(),
            notifier=EmailNotifier(),
            clock=timezone.now,
            min_lead=timedelta(hours=settings.REMINDER_MIN_LEAD_HOURS),
        )
