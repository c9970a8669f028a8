"""JSON views exposing the editing engine to the page editor UI.

Every endpoint accepts a JSON object via POST, validates it with the
matching form, runs one engine operation on a freshly parsed document and
returns the result as JSON. Nothing is persisted between requests.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Type

from django import forms
from django.conf import settings
from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from .engine import analyzer, executor, scanner, tagger
from .engine.config import EngineConfig, load_config
from .engine.document import parse_html, serialize
from .engine.exceptions import SuggestionApplyError
from .engine.highlight import HighlightController
from .engine.mutation import update_batch
from .forms import (
    ApplySuggestionForm,
    HighlightForm,
    ScanForm,
    StyledDocumentForm,
    SuggestionsForm,
    UpdateForm,
)

logger = logging.getLogger(__name__)


def _engine_config() -> EngineConfig:
    return load_config(getattr(settings, 'PAGEEDITOR_ENGINE_CONFIG', None))


def _bind(request: HttpRequest, form_class: Type[forms.Form]) -> forms.Form | JsonResponse:
    """Decode the JSON body and bind it to ``form_class``.

    Returns a 400 response when the body is not a JSON object or the form
    is invalid.
    """

    try:
        payload: Any = json.loads(request.body or b'{}')
    except (ValueError, UnicodeDecodeError):
        return JsonResponse({'errors': {'__all__': [{'message': 'Request body must be JSON.', 'code': 'invalid'}]}}, status=400)
    if not isinstance(payload, dict):
        return JsonResponse({'errors': {'__all__': [{'message': 'Request body must be a JSON object.', 'code': 'invalid'}]}}, status=400)

    form = form_class(payload)
    if not form.is_valid():
        return JsonResponse({'errors': form.errors.get_json_data()}, status=400)
    return form


@csrf_exempt
@require_POST
def scan(request: HttpRequest) -> JsonResponse:
    """Detect editable elements, tag them and return the tagged markup."""

    form = _bind(request, ScanForm)
    if isinstance(form, JsonResponse):
        return form

    soup = parse_html(form.cleaned_data['html'])
    candidates = scanner.scan(soup, form.cleaned_data['options'], _engine_config())
    tagger.tag(candidates)
    return JsonResponse({
        'html': serialize(soup),
        'candidates': [candidate.to_dict() for candidate in candidates],
    })


@csrf_exempt
@require_POST
def update(request: HttpRequest) -> JsonResponse:
    """Apply a batch of text updates to tagged elements."""

    form = _bind(request, UpdateForm)
    if isinstance(form, JsonResponse):
        return form

    soup = parse_html(form.cleaned_data['html'])
    result = update_batch(soup, form.cleaned_data['updates'])
    return JsonResponse({
        'html': serialize(soup),
        'success': result.success,
        'failed': result.failed,
    })


@csrf_exempt
@require_POST
def highlight(request: HttpRequest) -> JsonResponse:
    """Render one interaction state onto a tagged element."""

    form = _bind(request, HighlightForm)
    if isinstance(form, JsonResponse):
        return form

    soup = parse_html(form.cleaned_data['html'])
    controller = HighlightController(soup, _engine_config())
    identity: str = form.cleaned_data['identity']
    actions = {
        'hover': controller.hover,
        'selected': controller.select,
        'editing': controller.edit,
        'none': controller.clear,
    }
    found = actions[form.cleaned_data['state']](identity)
    return JsonResponse({'html': serialize(soup), 'found': found})


@csrf_exempt
@require_POST
def analyze(request: HttpRequest) -> JsonResponse:
    """Score the page and list its issues and opportunities."""

    form = _bind(request, StyledDocumentForm)
    if isinstance(form, JsonResponse):
        return form

    result = analyzer.analyze(form.cleaned_data['html'], form.cleaned_data['css'], _engine_config())
    return JsonResponse(result.to_dict())


@csrf_exempt
@require_POST
def suggestions(request: HttpRequest) -> JsonResponse:
    """Return ranked improvement suggestions for the page."""

    form = _bind(request, SuggestionsForm)
    if isinstance(form, JsonResponse):
        return form

    generated = analyzer.generate_suggestions(
        form.cleaned_data['html'],
        form.cleaned_data['css'],
        form.cleaned_data['business_context'],
        _engine_config(),
    )
    return JsonResponse({'suggestions': [item.to_dict() for item in generated]})


@csrf_exempt
@require_POST
def apply_suggestion(request: HttpRequest) -> JsonResponse:
    """Apply one suggestion; failures return the page exactly as it was sent."""

    form = _bind(request, ApplySuggestionForm)
    if isinstance(form, JsonResponse):
        return form

    html: str = form.cleaned_data['html']
    css: str = form.cleaned_data['css']
    suggestion = form.cleaned_data['suggestion']
    payload: Dict[str, Any]
    try:
        result = executor.apply(html, css, suggestion)
    except SuggestionApplyError as exc:
        logger.warning('Suggestion %s not applied: %s', suggestion.id, exc)
        payload = {'html': html, 'css': css, 'applied': False, 'error': str(exc)}
    else:
        payload = {'html': result.html, 'css': result.css, 'applied': result.applied}
    return JsonResponse(payload)
