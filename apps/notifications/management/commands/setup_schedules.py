"""
Management command to set up the Django-Q2 schedule for deadline reminders.

Creates/updates:
- Deadline Reminder Check: daily, at REMINDER_SCHEDULE_CRON
  (default '0 9 * * *', evaluated in TIME_ZONE)

Usage:
    python manage.py setup_schedules
    python manage.py setup_schedules --cron "30 8 * * *"

The command is idempotent - safe to run multiple times.
An existing schedule is updated if its configuration changes.
"""
from croniter import croniter
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django_q.models import Schedule

SCHEDULE_NAME = 'Deadline Reminder Check'
TASK_FUNC = 'apps.notifications.tasks.check_deadline_reminders'


class Command(BaseCommand):
    help = 'Set up the Django-Q2 schedule for deadline reminder checks'

    def add_arguments(self, parser):
        parser.add_argument(
            '--cron',
            default=None,
            help='Cron expression (defaults to REMINDER_SCHEDULE_CRON)',
        )

    def handle(self, *args, **options):
        cron = options['cron'] or settings.REMINDER_SCHEDULE_CRON
        if not croniter.is_valid(cron):
            raise CommandError(f'Invalid cron expression: "{cron}"')

        self.stdout.write('\nSetting up Django-Q2 schedules...\n')

        schedule, created = Schedule.objects.update_or_create(
            name=SCHEDULE_NAME,
            defaults={
                'func': TASK_FUNC,
                'schedule_type': Schedule.CRON,
                'cron': cron,
                'repeats': -1,  # Run forever
            }
        )
        if created:
            self.stdout.write(
                self.style.SUCCESS(f'✓ Created schedule: {SCHEDULE_NAME} ({cron})')
            )
        else:
            self.stdout.write(
                self.style.WARNING(f'↻ Updated schedule: {SCHEDULE_NAME} ({cron})')
            )

        self.stdout.write('')
        self.stdout.write('Schedule Summary:')
        self.stdout.write(f'  • {SCHEDULE_NAME}  → cron "{cron}" ({settings.TIME_ZONE})')
        self.stdout.write('')
        self.stdout.write(
            self.style.NOTICE(
                'Note: Ensure Django-Q cluster is running: python manage.py qcluster'
            )
        )
        self.stdout.write('')
