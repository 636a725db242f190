"""
Views for accounts app.

JSON auth API:
- register, login, logout (stateless)
- me: current user from the bearer token
"""

import logging

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from apps.core.http import api_view, form_errors_response, json_error, parse_json_body

from .decorators import jwt_required
from .forms import LoginForm, RegisterForm
from .services import AuthenticationFailed, login_user, register_user, serialize_user

logger = logging.getLogger(__name__)


# =============================================================================
# Authentication Views
# =============================================================================

@csrf_exempt
@require_POST
@api_view
def register_view(request):
    form = RegisterForm(parse_json_body(request))
    if not form.is_valid():
        return form_errors_response(form)

    user, token = register_user(
        email=form.cleaned_data['email'],
        password=form.cleaned_data['password'],
    )
    return JsonResponse({'user': serialize_user(user), 'token': token}, status=201)


@csrf_exempt
@require_POST
@api_view
def login_view(request):
    form = LoginForm(parse_json_body(request))
    if not form.is_valid():
        return form_errors_response(form)

    try:
        user, token = login_user(
            form.cleaned_data['email'],
            form.cleaned_data['password'],
            request=request,
        )
    except AuthenticationFailed as e:
        return json_error(str(e), status=401)

    return JsonResponse({'user': serialize_user(user), 'token': token})


@csrf_exempt
@require_POST
def logout_view(request):
    """
    Tokens are stateless; the client discards its copy.
    """
    return JsonResponse({'message': 'Logged out successfully'})


@require_GET
@jwt_required
def me_view(request):
    return JsonResponse({'user': serialize_user(request.jwt_user, include_created=True)})
