"""
Tests for the assignments API: CRUD, owner scoping, filters, stats.
"""

from datetime import timedelta

from django.utils import timezone

from apps.assignments.models import Assignment

from .base import APITestCase, create_assignment, create_user


class AssignmentAPITests(APITestCase):

    url = '/api/assignments/'

    def setUp(self):
        super().setUp()
        self.deadline = timezone.now() + timedelta(days=5)

    def detail_url(self, assignment):
        return f'{self.url}{assignment.pk}/'

    def test_create(self):
        response = self.send_json('post', self.url, {
            'title': '  Calculus problem set  ',
            'deadline': self.deadline.isoformat(),
        })

        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body['title'], 'Calculus problem set')
        self.assertEqual(body['status'], 'pending')
        self.assertEqual(body['userId'], self.user.pk)
        self.assertFalse(body['reminderSent'])
        self.assertIsNone(body['reminderSentAt'])

    def test_create_validation_errors(self):
        response = self.send_json('post', self.url, {
            'title': '',
            'deadline': (timezone.now() - timedelta(days=1)).isoformat(),
            'status': 'archived',
        })

        self.assertEqual(response.status_code, 400)
        self.assertEqual(set(response.json()['errors']), {'title', 'deadline', 'status'})

    def test_reminder_fields_not_writable(self):
        response = self.send_json('post', self.url, {
            'title': 'Essay',
            'deadline': self.deadline.isoformat(),
            'reminderSent': True,
            'reminder_sent': True,
        })

        self.assertEqual(response.status_code, 201)
        self.assertFalse(Assignment.objects.get(pk=response.json()['id']).reminder_sent)

    def test_list_is_scoped_to_owner(self):
        other = create_user(email='other@example.com')
        mine = create_assignment(self.user, self.deadline, title='Mine')
        create_assignment(other, self.deadline, title='Theirs')

        response = self.get_json(self.url)

        self.assertEqual([a['id'] for a in response.json()], [mine.pk])

    def test_other_users_assignment_is_404(self):
        other = create_user(email='other@example.com')
        theirs = create_assignment(other, self.deadline)

        self.assertEqual(self.get_json(self.detail_url(theirs)).status_code, 404)
        self.assertEqual(self.send_json('patch', self.detail_url(theirs), {'title': 'x'}).status_code, 404)
        self.assertEqual(self.send_json('delete', self.detail_url(theirs)).status_code, 404)
        self.assertTrue(Assignment.objects.filter(pk=theirs.pk).exists())

    def test_partial_update(self):
        assignment = create_assignment(self.user, self.deadline, title='Essay', description='Draft')

        response = self.send_json('patch', self.detail_url(assignment), {'status': 'in-progress'})

        self.assertEqual(response.status_code, 200)
        assignment.refresh_from_db()
        self.assertEqual(assignment.status, Assignment.Status.IN_PROGRESS)
        self.assertEqual(assignment.title, 'Essay')
        self.assertEqual(assignment.description, 'Draft')

    def test_put_accepts_partial_payload(self):
        assignment = create_assignment(self.user, self.deadline, title='Essay')

        response = self.send_json('put', self.detail_url(assignment), {'title': 'Final essay'})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['title'], 'Final essay')

    def test_update_keeps_reminder_state(self):
        assignment = create_assignment(
            self.user, self.deadline, reminder_sent=True, reminder_sent_at=timezone.now(),
        )

        self.send_json('patch', self.detail_url(assignment), {
            'deadline': (self.deadline + timedelta(days=2)).isoformat(),
        })

        assignment.refresh_from_db()
        self.assertTrue(assignment.reminder_sent)

    def test_delete(self):
        assignment = create_assignment(self.user, self.deadline)

        response = self.send_json('delete', self.detail_url(assignment))

        self.assertEqual(response.json(), {'message': 'Assignment deleted'})
        self.assertFalse(Assignment.objects.filter(pk=assignment.pk).exists())

    def test_filters(self):
        now = timezone.now()
        create_assignment(self.user, now + timedelta(days=10), title='Physics lab')
        done = create_assignment(
            self.user, now + timedelta(days=10), title='History essay',
            status=Assignment.Status.COMPLETED,
        )
        late = create_assignment(self.user, now - timedelta(days=1), title='Late lab')

        by_status = self.get_json(self.url, status='completed').json()
        by_search = self.get_json(self.url, search='LAB').json()
        overdue = self.get_json(self.url, due='overdue').json()

        self.assertEqual([a['id'] for a in by_status], [done.pk])
        self.assertEqual({a['title'] for a in by_search}, {'Physics lab', 'Late lab'})
        self.assertEqual([a['id'] for a in overdue], [late.pk])

    def test_invalid_filter_is_400(self):
        response = self.get_json(self.url, status='archived')
        self.assertEqual(response.status_code, 400)

    def test_stats(self):
        now = timezone.now()
        create_assignment(self.user, now + timedelta(days=10))
        create_assignment(self.user, now + timedelta(days=10), status=Assignment.Status.COMPLETED)
        create_assignment(self.user, now - timedelta(hours=1), status=Assignment.Status.IN_PROGRESS)

        stats = self.get_json(f'{self.url}stats/').json()

        self.assertEqual(stats['total'], 3)
        self.assertEqual(stats['pending'], 1)
        self.assertEqual(stats['in_progress'], 1)
        self.assertEqual(stats['completed'], 1)
        self.assertEqual(stats['overdue'], 1)
