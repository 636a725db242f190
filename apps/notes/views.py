"""
Views for notes app (JSON API, mounted at /api/notes/).

Includes:
- List with tag filter, search and stats (cached per user)
- Create, detail, partial update, delete
"""

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods

from apps.accounts.decorators import jwt_required
from apps.core.cache import cache_response
from apps.core.http import api_view, form_errors_response, parse_json_body

from .filters import NoteFilter
from .forms import NoteForm
from .models import Note
from .services import (
    CACHE_RESOURCE, EDITABLE_FIELDS, create_note, delete_note, get_user_note,
    note_stats, serialize_note, update_note,
)


def _filtered_notes(request):
    queryset = Note.objects.for_user(request.user).order_by('-created_at')
    return NoteFilter(request.GET, queryset=queryset).qs


@csrf_exempt
@require_http_methods(['GET', 'POST'])
@jwt_required
@api_view
def note_collection(request):
    if request.method == 'POST':
        form = NoteForm(parse_json_body(request))
        if not form.is_valid():
            return form_errors_response(form)
        note = create_note(user=request.user, **form.cleaned_data)
        return JsonResponse(serialize_note(note), status=201)

    return _note_list(request)


@cache_response(CACHE_RESOURCE, ttl=5 * 60)
def _note_list(request):
    return JsonResponse([serialize_note(n) for n in _filtered_notes(request)], safe=False)


@require_GET
@jwt_required
@cache_response(CACHE_RESOURCE, ttl=60)
def note_search_view(request):
    if not request.GET.get('q', '').strip():
        return JsonResponse({'error': 'Search query "q" is required'}, status=400)
    return JsonResponse([serialize_note(n) for n in _filtered_notes(request)], safe=False)


@require_GET
@jwt_required
@cache_response(CACHE_RESOURCE, ttl=2 * 60)
def note_stats_view(request):
    return JsonResponse(note_stats(request.user))


@csrf_exempt
@require_http_methods(['GET', 'PUT', 'PATCH', 'DELETE'])
@jwt_required
@api_view
def note_detail(request, pk):
    note = get_user_note(request.user, pk)

    if request.method == 'GET':
        return JsonResponse(serialize_note(note))

    if request.method == 'DELETE':
        delete_note(note, request.user)
        return JsonResponse({'message': 'Note deleted'})

    payload = parse_json_body(request)
    data = {field: payload.get(field, getattr(note, field)) for field in EDITABLE_FIELDS}
    form = NoteForm(data, instance=note)
    if not form.is_valid():
        return form_errors_response(form)

    changes = {field: form.cleaned_data[field] for field in EDITABLE_FIELDS if field in payload}
    note = update_note(note, request.user, **changes)
    return JsonResponse(serialize_note(note))
