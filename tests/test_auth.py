"""
Tests for registration, login, lockout and JWT authentication.
"""

from datetime import timedelta

import jwt
from django.conf import settings
from django.test import TestCase, override_settings
from django.utils import timezone

from apps.accounts.tokens import decode_token, issue_token

from .base import PASSWORD, APITestCase, User, create_user


class RegisterTests(TestCase):

    url = '/api/auth/register/'

    def register(self, email='new@example.com', password=PASSWORD):
        return self.client.post(
            self.url, {'email': email, 'password': password}, content_type='application/json',
        )

    def test_register_returns_user_and_token(self):
        response = self.register(email='New@Example.com')

        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body['user']['email'], 'new@example.com')
        self.assertEqual(decode_token(body['token'])['user_id'], body['user']['id'])

    def test_duplicate_email_rejected(self):
        create_user(email='taken@example.com')

        response = self.register(email='TAKEN@example.com')

        self.assertEqual(response.status_code, 400)
        self.assertIn('email', response.json()['errors'])

    def test_weak_password_rejected(self):
        response = self.register(password='short')

        self.assertEqual(response.status_code, 400)
        self.assertIn('password', response.json()['errors'])
        self.assertFalse(User.objects.filter(email='new@example.com').exists())

    def test_malformed_json_rejected(self):
        response = self.client.post(self.url, 'not json', content_type='application/json')
        self.assertEqual(response.status_code, 400)
        self.assertIn('error', response.json())


class LoginTests(TestCase):

    url = '/api/auth/login/'

    def setUp(self):
        self.user = create_user()

    def login(self, password=PASSWORD, email='student@example.com'):
        return self.client.post(
            self.url, {'email': email, 'password': password}, content_type='application/json',
        )

    def test_login_success(self):
        response = self.login(email='Student@Example.com')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['user'], {'id': self.user.pk, 'email': 'student@example.com'})

    def test_wrong_password(self):
        response = self.login(password='wrong-password')

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {'error': 'Invalid email or password'})

    def test_unknown_email(self):
        response = self.login(email='nobody@example.com')
        self.assertEqual(response.status_code, 401)

    @override_settings(LOCKOUT_THRESHOLD=3)
    def test_lockout_after_repeated_failures(self):
        for _ in range(3):
            self.login(password='wrong-password')

        response = self.login()

        self.assertEqual(response.status_code, 401)
        self.assertTrue(response.json()['error'].startswith('Account is locked'))
        self.user.refresh_from_db()
        self.assertTrue(self.user.is_locked())

    def test_successful_login_resets_failures(self):
        self.login(password='wrong-password')
        self.login()

        self.user.refresh_from_db()
        self.assertEqual(self.user.failed_login_attempts, 0)

    def test_logout(self):
        response = self.client.post('/api/auth/logout/')
        self.assertEqual(response.json(), {'message': 'Logged out successfully'})


class JWTAuthenticationTests(APITestCase):

    url = '/api/auth/me/'

    def test_me_with_valid_token(self):
        response = self.get_json(self.url)

        self.assertEqual(response.status_code, 200)
        user = response.json()['user']
        self.assertEqual(user['email'], 'student@example.com')
        self.assertIn('createdAt', user)

    def test_missing_token(self):
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {'error': 'Access token required'})

    def test_non_bearer_header(self):
        response = self.client.get(self.url, HTTP_AUTHORIZATION='Basic abc')
        self.assertEqual(response.status_code, 401)

    def test_expired_token(self):
        token = issue_token(self.user, now=timezone.now() - timedelta(hours=25))

        response = self.client.get(self.url, HTTP_AUTHORIZATION=f'Bearer {token}')

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json(), {'error': 'Token expired'})

    def test_tampered_token(self):
        token = jwt.encode(
            {'user_id': self.user.pk, 'iat': timezone.now(), 'exp': timezone.now() + timedelta(hours=1)},
            'some-other-secret-that-is-long-enough',
            algorithm=settings.JWT_ALGORITHM,
        )

        response = self.client.get(self.url, HTTP_AUTHORIZATION=f'Bearer {token}')

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json(), {'error': 'Invalid token'})

    def test_token_for_deleted_user(self):
        headers = self.auth_headers()
        self.user.delete()

        response = self.client.get(self.url, **headers)

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {'error': 'Invalid token: user not found'})

    def test_token_for_inactive_user(self):
        self.user.is_active = False
        self.user.save()

        response = self.get_json(self.url)

        self.assertEqual(response.status_code, 401)
