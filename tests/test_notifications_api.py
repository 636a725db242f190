"""
Tests for the reminder HTTP endpoints, the scheduled task and the
management commands.
"""

from datetime import timedelta
from io import StringIO

from django.apps import apps
from django.core import mail
from django.core.management import CommandError, call_command
from django.test import TestCase, override_settings
from django.utils import timezone
from django_q.models import Schedule

from apps.assignments.models import calendar_day_window
from apps.notifications.reminders import ReminderService
from apps.notifications.tasks import check_deadline_reminders

from .base import APITestCase, create_assignment, create_user


def due_tomorrow(user, title='Essay'):
    start, _ = calendar_day_window(timezone.now(), days_ahead=1)
    return create_assignment(user, start + timedelta(hours=12), title=title)


class ReminderServiceWiringTests(TestCase):

    def test_service_is_built_by_app_config(self):
        service = apps.get_app_config('notifications').reminder_service
        self.assertIsInstance(service, ReminderService)
        self.assertEqual(service.min_lead, timedelta(hours=24))


class TriggerRemindersTests(APITestCase):

    url = '/api/trigger-reminders/'

    def test_requires_token(self):
        response = self.client.post(self.url)
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {'error': 'Access token required'})

    def test_runs_check_and_reports_summary(self):
        assignment = due_tomorrow(self.user)

        response = self.send_json('post', self.url)

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body['message'], 'Reminder check completed')
        self.assertTrue(body['completed'])
        self.assertEqual(body['summary']['sent'], 1)
        self.assertEqual(len(mail.outbox), 1)
        assignment.refresh_from_db()
        self.assertTrue(assignment.reminder_sent)

    def test_manual_trigger_matches_scheduled_task(self):
        scheduled = due_tomorrow(self.user, title='Scheduled')
        check_deadline_reminders()
        scheduled.refresh_from_db()

        manual = due_tomorrow(self.user, title='Manual')
        self.send_json('post', self.url)
        manual.refresh_from_db()

        self.assertTrue(scheduled.reminder_sent)
        self.assertTrue(manual.reminder_sent)
        self.assertEqual(
            [m.subject for m in mail.outbox],
            ['Deadline Reminder: Scheduled', 'Deadline Reminder: Manual'],
        )

    @override_settings(EMAIL_BACKEND='django.core.mail.backends.smtp.EmailBackend', EMAIL_HOST='')
    def test_unconfigured_email_still_returns_200(self):
        assignment = due_tomorrow(self.user)

        response = self.send_json('post', self.url)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['summary']['failed'], 1)
        assignment.refresh_from_db()
        self.assertFalse(assignment.reminder_sent)

    def test_get_not_allowed(self):
        response = self.get_json(self.url)
        self.assertEqual(response.status_code, 405)


class ReminderStatusTests(APITestCase):

    def test_status_with_locmem_backend(self):
        response = self.get_json('/api/reminders/status/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'email_configured': True, 'connection_ok': True})

    @override_settings(EMAIL_BACKEND='django.core.mail.backends.smtp.EmailBackend', EMAIL_HOST='')
    def test_status_when_unconfigured(self):
        response = self.get_json('/api/reminders/status/')
        self.assertEqual(response.json(), {'email_configured': False, 'connection_ok': False})

    def test_send_test_reminder_to_caller(self):
        response = self.send_json('post', '/api/reminders/test/')

        self.assertEqual(response.json(), {'sent': True})
        self.assertEqual(mail.outbox[0].to, ['student@example.com'])
        self.assertEqual(mail.outbox[0].subject, 'Deadline Reminder: Test Assignment')


class SetupSchedulesCommandTests(TestCase):

    def test_creates_cron_schedule(self):
        call_command('setup_schedules', stdout=StringIO())

        schedule = Schedule.objects.get(name='Deadline Reminder Check')
        self.assertEqual(schedule.func, 'apps.notifications.tasks.check_deadline_reminders')
        self.assertEqual(schedule.schedule_type, Schedule.CRON)
        self.assertEqual(schedule.cron, '0 9 * * *')

    def test_is_idempotent(self):
        call_command('setup_schedules', stdout=StringIO())
        call_command('setup_schedules', '--cron', '30 7 * * *', stdout=StringIO())

        self.assertEqual(Schedule.objects.filter(name='Deadline Reminder Check').count(), 1)
        self.assertEqual(Schedule.objects.get(name='Deadline Reminder Check').cron, '30 7 * * *')

    @override_settings(REMINDER_SCHEDULE_CRON='not a cron')
    def test_rejects_invalid_cron(self):
        with self.assertRaises(CommandError):
            call_command('setup_schedules', stdout=StringIO())
        self.assertFalse(Schedule.objects.exists())


class SendDeadlineRemindersCommandTests(TestCase):

    def test_prints_summary(self):
        user = create_user()
        assignment = due_tomorrow(user)
        out = StringIO()

        call_command('send_deadline_reminders', stdout=out)

        output = out.getvalue()
        self.assertIn('Reminder check completed.', output)
        self.assertRegex(output, r'sent\s+1')
        assignment.refresh_from_db()
        self.assertTrue(assignment.reminder_sent)
