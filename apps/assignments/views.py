"""
Views for assignments app (JSON API, mounted at /api/assignments/).

Includes:
- List with filters (cached per user)
- Stats (cached per user)
- Create, detail, partial update, delete
"""

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods

from apps.accounts.decorators import jwt_required
from apps.core.cache import cache_response
from apps.core.http import api_view, form_errors_response, parse_json_body

from .filters import AssignmentFilter
from .forms import AssignmentForm
from .models import Assignment
from .services import (
    CACHE_RESOURCE, EDITABLE_FIELDS, assignment_stats, create_assignment,
    delete_assignment, get_user_assignment, serialize_assignment,
    update_assignment,
)


# =============================================================================
# Collection
# =============================================================================

@csrf_exempt
@require_http_methods(['GET', 'POST'])
@jwt_required
@api_view
def assignment_collection(request):
    if request.method == 'POST':
        return _create(request)
    return _list(request)


@cache_response(CACHE_RESOURCE, ttl=5 * 60)
def _list(request):
    queryset = Assignment.objects.for_user(request.user).order_by('-created_at')
    filterset = AssignmentFilter(request.GET, queryset=queryset)
    if not filterset.is_valid():
        return form_errors_response(filterset.form)

    return JsonResponse(
        [serialize_assignment(a) for a in filterset.qs],
        safe=False,
    )


def _create(request):
    form = AssignmentForm(parse_json_body(request))
    if not form.is_valid():
        return form_errors_response(form)

    assignment = create_assignment(user=request.user, **form.cleaned_data)
    return JsonResponse(serialize_assignment(assignment), status=201)


@require_GET
@jwt_required
@cache_response(CACHE_RESOURCE, ttl=2 * 60)
def assignment_stats_view(request):
    return JsonResponse(assignment_stats(request.user))


# =============================================================================
# Single assignment
# =============================================================================

@csrf_exempt
@require_http_methods(['GET', 'PUT', 'PATCH', 'DELETE'])
@jwt_required
@api_view
def assignment_detail(request, pk):
    assignment = get_user_assignment(request.user, pk)

    if request.method == 'GET':
        return JsonResponse(serialize_assignment(assignment))

    if request.method == 'DELETE':
        delete_assignment(assignment, request.user)
        return JsonResponse({'message': 'Assignment deleted'})

    # PUT and PATCH both accept partial payloads
    payload = parse_json_body(request)
    data = {
        field: payload.get(field, getattr(assignment, field))
        for field in EDITABLE_FIELDS
    }
    form = AssignmentForm(data, instance=assignment)
    if not form.is_valid():
        return form_errors_response(form)

    changes = {field: form.cleaned_data[field] for field in EDITABLE_FIELDS if field in payload}
    assignment = update_assignment(assignment, request.user, **changes)
    return JsonResponse(serialize_assignment(assignment))
