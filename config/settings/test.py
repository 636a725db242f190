"""
Django test settings for academic_organizer project.

Used by pytest-django (see pyproject.toml) and `manage.py test`.
"""

from .base import *

DEBUG = False

ENVIRONMENT = 'test'

ALLOWED_HOSTS = ['testserver', 'localhost']

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

# Fast hashing for tests
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'

JWT_SECRET = 'test-jwt-secret-with-enough-length-for-hs256'

TIME_ZONE = 'UTC'

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'academic-organizer-tests',
    }
}

Q_CLUSTER = {
    'name': 'academic_organizer_test',
    'sync': True,
    'orm': 'default',
}

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'null': {
            'class': 'logging.NullHandler',
        },
    },
    'root': {
        'handlers': ['null'],
        'level': 'WARNING',
    },
}
