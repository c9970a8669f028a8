"""Forms validating JSON payloads for the page editor API.

Each endpoint receives a JSON object which is bound to one of these forms.
Cleaned data is converted into the engine's own types so views only deal
with validated values.
"""

from __future__ import annotations

from typing import Any, Dict, List

import soupsieve as sv
from django import forms

from .engine.scanner import ScanOptions
from .engine.types import BusinessContext, Suggestion

HIGHLIGHT_STATES = (
    ('hover', 'Hover'),
    ('selected', 'Selected'),
    ('editing', 'Editing'),
    ('none', 'None'),
)

_INT_OPTIONS = ('min_text_length', 'max_text_length')
_BOOL_OPTIONS = ('prioritize_headings', 'skip_nested_elements')
_LIST_OPTIONS = ('include_selectors', 'exclude_selectors')


class DocumentForm(forms.Form):
    """Base form carrying the serialized page markup."""

    html = forms.CharField(required=False, strip=False, empty_value='')


class StyledDocumentForm(DocumentForm):
    css = forms.CharField(required=False, strip=False, empty_value='')


class ScanForm(DocumentForm):
    options = forms.JSONField(required=False)

    def clean_options(self) -> ScanOptions:
        """Build ``ScanOptions`` from the optional options object."""

        raw = self.cleaned_data.get('options') or {}
        if not isinstance(raw, dict):
            raise forms.ValidationError('Options must be an object.')

        values: Dict[str, Any] = {}
        for key in _INT_OPTIONS:
            if key in raw:
                if not isinstance(raw[key], int) or isinstance(raw[key], bool) or raw[key] < 0:
                    raise forms.ValidationError(f'{key} must be a non-negative integer.')
                values[key] = raw[key]
        for key in _BOOL_OPTIONS:
            if key in raw:
                if not isinstance(raw[key], bool):
                    raise forms.ValidationError(f'{key} must be true or false.')
                values[key] = raw[key]
        for key in _LIST_OPTIONS:
            if key in raw:
                if not isinstance(raw[key], list) or not all(isinstance(item, str) for item in raw[key]):
                    raise forms.ValidationError(f'{key} must be a list of selectors.')
                for selector in raw[key]:
                    try:
                        sv.compile(selector)
                    except sv.SelectorSyntaxError as exc:
                        raise forms.ValidationError(f'{key} contains an invalid selector {selector!r}: {exc}') from exc
                values[key] = list(raw[key])
        return ScanOptions(**values)


class UpdateForm(DocumentForm):
    updates = forms.JSONField(required=False)

    def clean_updates(self) -> List[Dict[str, str]]:
        """Require a list of ``{identity, content}`` objects."""

        raw = self.cleaned_data.get('updates')
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise forms.ValidationError('Updates must be a list.')

        parsed: List[Dict[str, str]] = []
        for index, item in enumerate(raw, start=1):
            if not isinstance(item, dict):
                raise forms.ValidationError(f'Update {index} must be an object.')
            identity = item.get('identity') or item.get('elementId')
            if not identity:
                raise forms.ValidationError(f'Update {index} is missing an identity.')
            content = item.get('content')
            if not isinstance(content, str):
                raise forms.ValidationError(f'Update {index} content must be text.')
            parsed.append({'identity': str(identity), 'content': content})
        return parsed


class HighlightForm(DocumentForm):
    identity = forms.CharField()
    state = forms.ChoiceField(choices=HIGHLIGHT_STATES)


class SuggestionsForm(StyledDocumentForm):
    business_context = forms.JSONField(required=False)

    def clean_business_context(self) -> BusinessContext | None:
        raw = self.cleaned_data.get('business_context')
        if raw in (None, '', {}):
            return None
        if not isinstance(raw, dict):
            raise forms.ValidationError('Business context must be an object.')
        return BusinessContext.from_dict(raw)


class ApplySuggestionForm(StyledDocumentForm):
    suggestion = forms.JSONField()

    def clean_suggestion(self) -> Suggestion:
        """Parse the suggestion object, requiring an action with type and target."""

        raw = self.cleaned_data.get('suggestion')
        if not isinstance(raw, dict):
            raise forms.ValidationError('Suggestion must be an object.')
        action = raw.get('action')
        if not isinstance(action, dict) or not action.get('type') or not action.get('target'):
            raise forms.ValidationError('Suggestion action needs a type and a target.')
        try:
            return Suggestion.from_dict(raw)
        except (TypeError, ValueError) as exc:
            raise forms.ValidationError(f'Suggestion is malformed: {exc}') from exc
