"""
JSON helpers shared by the API views.

- parse_json_body: decode a request body into a dict
- json_error: uniform {"error": ...} responses
- form_errors_response: 400 with per-field validation messages
- api_view: decorator translating service exceptions to JSON responses
"""

import json
from datetime import timezone as dt_timezone
from functools import wraps

from django.core.exceptions import PermissionDenied, ValidationError
from django.http import Http404, JsonResponse
from django.utils import timezone


class InvalidJSONBody(ValueError):
    """Raised when a request body is not a JSON object."""


def parse_json_body(request):
    """
    Decode the request body as a JSON object.

    An empty body is treated as {}.

    Raises:
        InvalidJSONBody: If the body is not valid JSON or not an object
    """
    if not request.body:
        return {}

    try:
        data = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidJSONBody(f'Malformed JSON body: {e}') from e

    if not isinstance(data, dict):
        raise InvalidJSONBody('JSON body must be an object')

    return data


def json_error(message, status=400, **extra):
    payload = {'error': message}
    payload.update(extra)
    return JsonResponse(payload, status=status)


def form_errors_response(form):
    """Return 400 with {"errors": {field: [messages]}} for an invalid form."""
    errors = {
        field: [str(message) for message in messages]
        for field, messages in form.errors.items()
    }
    return JsonResponse({'errors': errors}, status=400)


def isoformat(value):
    """ISO-8601 for aware datetimes, in UTC; None passes through."""
    if value is None:
        return None
    return timezone.localtime(value, dt_timezone.utc).isoformat().replace('+00:00', 'Z')


def api_view(view_func):
    """
    Map service-layer exceptions to JSON responses.

    - InvalidJSONBody / ValidationError -> 400
    - PermissionDenied -> 403
    - Http404 -> 404

    Anything else propagates to handler500.
    """
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        try:
            return view_func(request, *args, **kwargs)
        except InvalidJSONBody as e:
            return json_error(str(e), status=400)
        except ValidationError as e:
            if hasattr(e, 'message_dict'):
                return JsonResponse({'errors': e.message_dict}, status=400)
            return JsonResponse({'errors': {'__all__': e.messages}}, status=400)
        except PermissionDenied as e:
            return json_error(str(e) or 'Permission denied', status=403)
        except Http404 as e:
            return json_error(str(e) or 'Not found', status=404)

    return wrapper
