"""
Management command to run the deadline reminder check immediately.

Same pipeline as the scheduled job and POST /api/trigger-reminders/.

Usage:
    python manage.py send_deadline_reminders
"""
from django.core.management.base import BaseCommand

from apps.notifications.reminders import get_reminder_service


class Command(BaseCommand):
    help = 'Send reminders for assignments due tomorrow'

    def handle(self, *args, **options):
        result = get_reminder_service().run_manual_check()
        summary = result['summary']

        self.stdout.write('\nDeadline reminder check\n')
        for key in ('scanned', 'eligible', 'skipped', 'sent', 'failed', 'mark_failed'):
            self.stdout.write(f'  {key:<12} {summary[key]}')
        for error in summary['errors']:
            self.stdout.write(self.style.ERROR(f'  ✗ {error}'))
        self.stdout.write('')

        if result['completed']:
            self.stdout.write(self.style.SUCCESS('Reminder check completed.'))
        else:
            self.stdout.write(self.style.ERROR('Reminder check did not complete (scan failed).'))
