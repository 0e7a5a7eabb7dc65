"""Tests for response builders and structured logging."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1] / 'backend' / 'src'))

from dapp_admin.api.schemas import SaveDappResult  # noqa: E402
from dapp_admin.utils.logging import (  # noqa: E402
    StructuredLogFormatter,
    clear_request_context,
    get_logger,
    set_request_context,
)
from dapp_admin.utils.responses import (  # noqa: E402
    CORS_HEADERS,
    error_response,
    json_response,
    preflight_response,
)


class TestResponses:
    """Tests for API Gateway response builders."""

    def test_preflight_has_only_cors_headers(self) -> None:
        response = preflight_response()
        assert response == {'statusCode': 200, 'headers': CORS_HEADERS, 'body': 'ok'}

    def test_json_response_headers(self) -> None:
        response = json_response(200, {'ok': True})
        headers = response['headers']
        assert headers['Content-Type'] == 'application/json'
        assert headers['Access-Control-Allow-Origin'] == '*'
        assert headers['Access-Control-Allow-Methods'] == 'POST, OPTIONS'
        assert headers['Cache-Control'].startswith('no-store')

    def test_json_response_serializes_models(self) -> None:
        result = SaveDappResult(operation='UPDATE', data=[], id='abc')
        body = json.loads(json_response(200, result)['body'])
        assert body == {'success': True, 'operation': 'UPDATE', 'data': [], 'id': 'abc'}

    def test_extra_headers(self) -> None:
        response = json_response(200, {}, headers={'X-Trace': '1'})
        assert response['headers']['X-Trace'] == '1'

    def test_error_response_with_details(self) -> None:
        response = error_response(500, 'boom', 'Traceback ...')
        assert response['statusCode'] == 500
        assert json.loads(response['body']) == {'error': 'boom', 'details': 'Traceback ...'}

    def test_error_response_without_details(self) -> None:
        body = json.loads(error_response(400, 'bad')['body'])
        assert body == {'error': 'bad'}


class TestStructuredLogging:
    """Tests for the JSON log formatter."""

    def _format(self, logger_name: str, **context) -> dict:
        records: list[logging.LogRecord] = []

        class _Capture(logging.Handler):
            def emit(self, record: logging.LogRecord) -> None:
                records.append(record)

        base = logging.getLogger(logger_name)
        base.addHandler(_Capture())
        base.setLevel(logging.INFO)
        get_logger(logger_name, component='writer').info('saved', context=context)
        return json.loads(StructuredLogFormatter().format(records[-1]))

    def test_includes_context_and_request_id(self) -> None:
        set_request_context(req_id='req-1', fn_name='admin-save-dapp')
        try:
            payload = self._format('tests.logging.context', dapp_id='abc')
        finally:
            clear_request_context()

        assert payload['message'] == 'saved'
        assert payload['level'] == 'INFO'
        assert payload['request_id'] == 'req-1'
        assert payload['function_name'] == 'admin-save-dapp'
        assert payload['context'] == {'component': 'writer', 'dapp_id': 'abc'}

    def test_request_id_cleared(self) -> None:
        payload = self._format('tests.logging.cleared')
        assert 'request_id' not in payload
