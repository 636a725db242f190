"""
View decorators for JWT-protected API endpoints.
"""

from functools import wraps

from django.http import JsonResponse


def jwt_required(view_func):
    """
    Require a valid bearer token (see JWTAuthenticationMiddleware).

    - No token: 401 {"error": "Access token required"}
    - Rejected token: the status/message recorded by the middleware
    """
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        jwt_error = getattr(request, 'jwt_error', None)
        if jwt_error is not None:
            status, message = jwt_error
            return JsonResponse({'error': message}, status=status)

        if getattr(request, 'jwt_user', None) is None:
            return JsonResponse({'error': 'Access token required'}, status=401)

        return view_func(request, *args, **kwargs)

    return wrapper
