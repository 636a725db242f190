"""
Scheduled tasks for notifications app.

Registered with Django-Q2 by `manage.py setup_schedules`:
- check_deadline_reminders: daily (REMINDER_SCHEDULE_CRON, default 9:00 AM)
"""

import logging

from .reminders import get_reminder_service

logger = logging.getLogger(__name__)


def check_deadline_reminders():
    """
    Email owners of assignments due tomorrow and flag them as reminded.

    Never raises: failures are logged and reported in the run summary.
    """
    logger.info('Running scheduled deadline reminder check')
    get_reminder_service().run_scheduled_check()
