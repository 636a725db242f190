"""
Tests for health check, JSON error handlers and the per-user response cache.
"""

from datetime import timedelta

from django.test import TestCase
from django.utils import timezone

from .base import APITestCase, create_assignment, create_user


class HealthAndErrorTests(TestCase):

    def test_health(self):
        response = self.client.get('/health/')

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body['status'], 'ok')
        self.assertEqual(body['environment'], 'test')
        self.assertTrue(body['timestamp'].endswith('Z'))

    def test_unknown_route(self):
        response = self.client.get('/api/does-not-exist/')

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {'error': 'Route not found'})


class ResponseCacheTests(APITestCase):

    url = '/api/assignments/'

    def test_second_get_is_hit(self):
        first = self.get_json(self.url)
        second = self.get_json(self.url)

        self.assertEqual(first['X-Cache'], 'MISS')
        self.assertEqual(second['X-Cache'], 'HIT')
        self.assertEqual(first.content, second.content)

    def test_mutation_invalidates(self):
        self.get_json(self.url)
        self.send_json('post', self.url, {
            'title': 'New',
            'deadline': (timezone.now() + timedelta(days=3)).isoformat(),
        })

        response = self.get_json(self.url)

        self.assertEqual(response['X-Cache'], 'MISS')
        self.assertEqual(len(response.json()), 1)

    def test_cache_is_per_user(self):
        other = create_user(email='other@example.com')
        create_assignment(other, timezone.now() + timedelta(days=3))
        self.get_json(self.url)

        response = self.get_json(self.url, user=other)

        self.assertEqual(response['X-Cache'], 'MISS')
        self.assertEqual(len(response.json()), 1)

    def test_query_string_is_part_of_key(self):
        self.get_json(self.url)
        response = self.get_json(self.url, status='pending')
        self.assertEqual(response['X-Cache'], 'MISS')

    def test_invalidation_is_per_resource(self):
        self.get_json('/api/notes/')
        self.send_json('post', self.url, {
            'title': 'New',
            'deadline': (timezone.now() + timedelta(days=3)).isoformat(),
        })

        self.assertEqual(self.get_json('/api/notes/')['X-Cache'], 'HIT')
