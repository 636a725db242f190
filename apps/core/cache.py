"""
Per-user response cache for read-only API endpoints.

Successful JSON GET responses are stored in Django's cache framework
(LocMemCache by default) under a key built from:
- the resource namespace ('assignments', 'notes')
- the requesting user's id
- a per-user, per-resource version number
- the full request path including the query string

Mutations call invalidate_user_cache(), which bumps the version so every
previously cached response for that user and resource becomes unreachable
and simply expires.

Usage:
    @jwt_required
    @cache_response('assignments', ttl=300)
    def assignment_list(request): ...
"""

import hashlib
import logging
from functools import wraps

from django.core.cache import cache
from django.http import HttpResponse

logger = logging.getLogger(__name__)

VERSION_KEY_PREFIX = 'api-cache-version'
RESPONSE_KEY_PREFIX = 'api-cache'


def _user_key(user):
    if user is not None and user.is_authenticated:
        return str(user.pk)
    return 'anonymous'


def _version_key(resource, user_key):
    return f'{VERSION_KEY_PREFIX}:{resource}:{user_key}'


def get_cache_version(resource, user):
    """Current cache version for (resource, user); created on first use."""
    key = _version_key(resource, _user_key(user))
    version = cache.get(key)
    if version is None:
        cache.add(key, 1, timeout=None)
        version = cache.get(key, 1)
    return version


def invalidate_user_cache(resource, user):
    """Drop every cached response of `resource` for `user`."""
    key = _version_key(resource, _user_key(user))
    try:
        cache.incr(key)
    except ValueError:
        # Key missing or evicted: any fresh version invalidates old entries
        cache.set(key, 2, timeout=None)
    logger.debug(f'Cache invalidated for {resource} (user {_user_key(user)})')


def build_cache_key(resource, request):
    user = getattr(request, 'user', None)
    version = get_cache_version(resource, user)
    path_hash = hashlib.md5(request.get_full_path().encode('utf-8')).hexdigest()
    return f'{RESPONSE_KEY_PREFIX}:{resource}:{_user_key(user)}:v{version}:{path_hash}'


def cache_response(resource, ttl=300):
    """
    Cache 200 responses of a GET view for `ttl` seconds.

    Non-GET requests bypass the cache entirely. Responses carry an
    X-Cache header of HIT or MISS.
    """
    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if request.method != 'GET':
                return view_func(request, *args, **kwargs)

            key = build_cache_key(resource, request)
            cached = cache.get(key)
            if cached is not None:
                logger.debug(f'Cache hit for {request.get_full_path()}')
                response = HttpResponse(cached, content_type='application/json')
                response['X-Cache'] = 'HIT'
                return response

            response = view_func(request, *args, **kwargs)
            if response.status_code == 200:
                cache.set(key, response.content, ttl)
                logger.debug(f'Cached response for {request.get_full_path()} ({ttl}s)')
            response['X-Cache'] = 'MISS'
            return response

        return wrapper
    return decorator
