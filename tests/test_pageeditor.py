from __future__ import annotations

import json
from types import SimpleNamespace
from unittest.mock import patch

from django.core.cache import cache
from django.http import HttpResponse
from django.test import RequestFactory, SimpleTestCase, override_settings
from django.urls import reverse

from pageeditor.engine.exceptions import SuggestionApplyError
from pageeditor.engine.scanner import ScanOptions
from pageeditor.forms import ApplySuggestionForm, ScanForm, SuggestionsForm, UpdateForm
from pageeditor.middleware import SlidingWindowRateThrottle

PAGE = (
    '<!DOCTYPE html><html><head><title>Landing</title></head>'
    '<body><div><h1>Title</h1><p>Short text</p></div></body></html>'
)


class ApiTestCase(SimpleTestCase):
    def setUp(self) -> None:
        cache.clear()

    def post_json(self, name: str, payload):
        return self.client.post(reverse(f'pageeditor:{name}'), data=json.dumps(payload), content_type='application/json')

    def scanned(self):
        response = self.post_json('scan', {'html': PAGE})
        self.assertEqual(response.status_code, 200)
        return response.json()


class FormTests(SimpleTestCase):
    def test_scan_options_become_scan_options(self) -> None:
        form = ScanForm({'html': PAGE, 'options': {'min_text_length': 5, 'skip_nested_elements': False}})
        self.assertTrue(form.is_valid(), form.errors)
        options = form.cleaned_data['options']
        self.assertIsInstance(options, ScanOptions)
        self.assertEqual(options.min_text_length, 5)
        self.assertFalse(options.skip_nested_elements)
        self.assertTrue(options.prioritize_headings)

    def test_scan_options_reject_wrong_types(self) -> None:
        form = ScanForm({'html': PAGE, 'options': {'min_text_length': 'five'}})
        self.assertFalse(form.is_valid())
        self.assertIn('min_text_length', form.errors['options'][0])

    def test_scan_options_reject_invalid_selectors(self) -> None:
        form = ScanForm({'html': PAGE, 'options': {'include_selectors': ['p', 'p[']}})
        self.assertFalse(form.is_valid())
        self.assertIn('include_selectors', form.errors['options'][0])

        form = ScanForm({'html': PAGE, 'options': {'exclude_selectors': ['div >']}})
        self.assertFalse(form.is_valid())
        self.assertIn('exclude_selectors', form.errors['options'][0])

    def test_update_items_accept_element_id_alias(self) -> None:
        form = UpdateForm({'html': PAGE, 'updates': [{'elementId': 'p-1', 'content': 'New'}]})
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.cleaned_data['updates'], [{'identity': 'p-1', 'content': 'New'}])

    def test_update_items_require_identity(self) -> None:
        form = UpdateForm({'html': PAGE, 'updates': [{'content': 'New'}]})
        self.assertFalse(form.is_valid())
        self.assertIn('Update 1', form.errors['updates'][0])

    def test_business_context_is_optional(self) -> None:
        form = SuggestionsForm({'html': PAGE})
        self.assertTrue(form.is_valid(), form.errors)
        self.assertIsNone(form.cleaned_data['business_context'])

        form = SuggestionsForm({'html': PAGE, 'business_context': {'industry': 'saas', 'competitive_advantage': 'speed'}})
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.cleaned_data['business_context'].competitive_advantage, ['speed'])

    def test_suggestion_requires_action_type_and_target(self) -> None:
        form = ApplySuggestionForm({'html': PAGE, 'suggestion': {'id': 's1', 'action': {'type': 'add'}}})
        self.assertFalse(form.is_valid())
        self.assertIn('suggestion', form.errors)


class ScanViewTests(ApiTestCase):
    def test_scan_tags_and_ranks_candidates(self) -> None:
        data = self.scanned()
        identities = [item['identity'] for item in data['candidates']]
        self.assertEqual(identities, ['h1-div-title-0-1', 'p-div-shorttext-1-2'])
        self.assertEqual(data['candidates'][0]['priority_score'], 130)
        self.assertIn('data-editable-id="h1-div-title-0-1"', data['html'])
        self.assertIsNone(data['candidates'][0]['bounding_box'])

    def test_scan_rejects_invalid_json(self) -> None:
        response = self.client.post(reverse('pageeditor:scan'), data='{not json', content_type='application/json')
        self.assertEqual(response.status_code, 400)
        self.assertIn('__all__', response.json()['errors'])

    def test_scan_rejects_non_object_body(self) -> None:
        response = self.post_json('scan', ['html'])
        self.assertEqual(response.status_code, 400)

    def test_scan_rejects_invalid_selector(self) -> None:
        response = self.post_json('scan', {'html': PAGE, 'options': {'include_selectors': ['p[']}})
        self.assertEqual(response.status_code, 400)
        self.assertIn('options', response.json()['errors'])

    def test_scan_requires_post(self) -> None:
        response = self.client.get(reverse('pageeditor:scan'))
        self.assertEqual(response.status_code, 405)


class UpdateViewTests(ApiTestCase):
    def test_update_batch_reports_counts(self) -> None:
        data = self.scanned()
        response = self.post_json('update', {
            'html': data['html'],
            'updates': [
                {'identity': 'h1-div-title-0-1', 'content': 'Better title'},
                {'identity': 'missing-id', 'content': 'Lost'},
            ],
        })
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual((body['success'], body['failed']), (1, 1))
        self.assertIn('Better title', body['html'])
        self.assertIn('data-original-content="Title"', body['html'])

    def test_update_rejects_malformed_items(self) -> None:
        response = self.post_json('update', {'html': PAGE, 'updates': 'nope'})
        self.assertEqual(response.status_code, 400)
        self.assertIn('updates', response.json()['errors'])


class HighlightViewTests(ApiTestCase):
    def test_editing_highlight_is_rendered(self) -> None:
        data = self.scanned()
        response = self.post_json('highlight', {
            'html': data['html'],
            'identity': 'p-div-shorttext-1-2',
            'state': 'editing',
        })
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body['found'])
        self.assertIn('edit-editing', body['html'])
        self.assertIn('outline: 3px solid #10b981', body['html'])

    def test_editing_moves_between_requests(self) -> None:
        data = self.scanned()
        first = self.post_json('highlight', {
            'html': data['html'],
            'identity': 'p-div-shorttext-1-2',
            'state': 'editing',
        }).json()
        second = self.post_json('highlight', {
            'html': first['html'],
            'identity': 'h1-div-title-0-1',
            'state': 'editing',
        }).json()
        self.assertTrue(second['found'])
        self.assertEqual(second['html'].count('edit-editing'), 1)
        self.assertEqual(second['html'].count('outline:'), 1)

    def test_unknown_identity_is_reported(self) -> None:
        data = self.scanned()
        response = self.post_json('highlight', {'html': data['html'], 'identity': 'missing-id', 'state': 'hover'})
        self.assertEqual(response.status_code, 200)
        self.assertFalse(response.json()['found'])

    def test_invalid_state_is_rejected(self) -> None:
        response = self.post_json('highlight', {'html': PAGE, 'identity': 'x', 'state': 'blink'})
        self.assertEqual(response.status_code, 400)
        self.assertIn('state', response.json()['errors'])


class AnalysisViewTests(ApiTestCase):
    def test_analyze_empty_page(self) -> None:
        response = self.post_json('analyze', {})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body['overall_score'], 60)
        self.assertEqual(body['issues'][0]['message'], 'No H1 heading found')

    def test_suggestions_include_context_rules(self) -> None:
        response = self.post_json('suggestions', {
            'html': PAGE,
            'css': '',
            'business_context': {'industry': 'SaaS', 'target_audience': 'small businesses'},
        })
        self.assertEqual(response.status_code, 200)
        suggestions = response.json()['suggestions']
        priorities = [item['priority'] for item in suggestions]
        self.assertEqual(priorities, sorted(priorities, reverse=True))
        self.assertEqual(suggestions[0]['action']['value'], 'free-trial')
        self.assertTrue(all(item['id'].startswith('suggestion_') for item in suggestions))


class ApplySuggestionViewTests(ApiTestCase):
    def suggestion(self, action_type: str, target: str, value: str = '') -> dict:
        return {
            'id': 'suggestion_view',
            'type': 'content',
            'category': 'marketing',
            'title': 'Test',
            'description': 'Test',
            'impact': 'high',
            'confidence': 0.9,
            'priority': 90,
            'action': {'type': action_type, 'target': target, 'value': value},
            'reasoning': 'Test',
        }

    def test_apply_adds_stylesheet_block(self) -> None:
        response = self.post_json('apply', {'html': PAGE, 'css': 'body {}', 'suggestion': self.suggestion('add', 'css', 'shadow')})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body['applied'])
        self.assertIn('box-shadow', body['css'])

    def test_apply_unknown_action_returns_inputs(self) -> None:
        response = self.post_json('apply', {'html': PAGE, 'css': 'body {}', 'suggestion': self.suggestion('remove', 'footer')})
        body = response.json()
        self.assertEqual((body['html'], body['css'], body['applied']), (PAGE, 'body {}', False))

    @patch('pageeditor.views.executor.apply')
    def test_apply_failure_returns_original_page(self, mock_apply) -> None:
        mock_apply.side_effect = SuggestionApplyError('suggestion_view', 'tree exploded')
        response = self.post_json('apply', {'html': PAGE, 'css': 'p {}', 'suggestion': self.suggestion('add', 'h1')})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual((body['html'], body['css'], body['applied']), (PAGE, 'p {}', False))
        self.assertIn('tree exploded', body['error'])

    def test_apply_requires_suggestion(self) -> None:
        response = self.post_json('apply', {'html': PAGE})
        self.assertEqual(response.status_code, 400)
        self.assertIn('suggestion', response.json()['errors'])


class RateLimitMiddlewareTests(SimpleTestCase):
    def setUp(self) -> None:
        self.factory = RequestFactory()
        cache.clear()

    def build_request(self, view_name: str = 'sample:action'):
        req = self.factory.post('/sample-action/')
        req.resolver_match = SimpleNamespace(namespace='sample', url_name='action', view_name=view_name)
        req.META['REMOTE_ADDR'] = '127.0.0.1'
        return req

    def run_through(self, middleware, request):
        blocked = middleware.process_view(request, lambda req: HttpResponse('OK'), (), {})
        return blocked or middleware(request)

    @override_settings(THROTTLED_ROUTES=['sample:action'], THROTTLE_ROUTE_LIMITS={})
    def test_rate_limit_blocks_after_threshold(self) -> None:
        middleware = SlidingWindowRateThrottle(lambda request: HttpResponse('OK'), limit=2, window=60, key_prefix='test-rate')

        first = self.run_through(middleware, self.build_request())
        self.assertEqual(first.status_code, 200)
        second = self.run_through(middleware, self.build_request())
        self.assertEqual(second.status_code, 200)
        third = self.run_through(middleware, self.build_request())
        self.assertEqual(third.status_code, 429)
        self.assertEqual(third['Retry-After'], '60')
        self.assertEqual(json.loads(third.content)['route'], 'sample:action')

    @override_settings(THROTTLED_ROUTES=['sample:action'], THROTTLE_ROUTE_LIMITS={'sample:action': (1, 30)})
    def test_route_override_applies(self) -> None:
        middleware = SlidingWindowRateThrottle(lambda request: HttpResponse('OK'), limit=5, window=60, key_prefix='test-route')

        self.assertEqual(self.run_through(middleware, self.build_request()).status_code, 200)
        blocked = self.run_through(middleware, self.build_request())
        self.assertEqual(blocked.status_code, 429)
        self.assertEqual(blocked['Retry-After'], '30')

    @override_settings(THROTTLED_ROUTES=['sample:action'])
    def test_unprotected_routes_pass(self) -> None:
        middleware = SlidingWindowRateThrottle(lambda request: HttpResponse('OK'), limit=1, window=60, key_prefix='test-open')

        for _ in range(3):
            response = self.run_through(middleware, self.build_request('other:view'))
            self.assertEqual(response.status_code, 200)

    @override_settings(THROTTLED_ROUTES=['sample:action'], THROTTLE_ROUTE_LIMITS={})
    def test_forwarded_clients_are_counted_separately(self) -> None:
        middleware = SlidingWindowRateThrottle(lambda request: HttpResponse('OK'), limit=1, window=60, key_prefix='test-ip')

        for address in ('10.0.0.1', '10.0.0.2'):
            request = self.build_request()
            request.META['HTTP_X_FORWARDED_FOR'] = f'{address}, 172.16.0.1'
            self.assertEqual(self.run_through(middleware, request).status_code, 200)
