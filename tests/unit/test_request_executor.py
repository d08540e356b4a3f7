"""
Unit tests for RequestExecutor.

Covers body semantics per method, header forwarding, timing and the
failure-as-value behaviour.
"""

import json
import logging
from unittest.mock import Mock, patch

import pytest
import requests

from api_regression.api.request_executor import RequestExecutor
from api_regression.domain.endpoint import ApiEndpointConfig
from api_regression.domain.results import FailureReason


def _mock_response(payload=None, text=None, status_code=200):
    response = Mock()
    response.status_code = status_code
    if text is not None:
        response.json.side_effect = ValueError("not json")
        response.text = text
    else:
        response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


def test_get_request_sends_no_body(session):
    session.request.return_value = _mock_response({"key": "value"})
    executor = RequestExecutor(session=session)
    endpoint = ApiEndpointConfig(
        name="A",
        url="http://example.com/api",
        method="GET",
        headers={"Authorization": "token"},
        params={"ignored": True},
    )

    result = executor.execute(endpoint, "v1")

    assert result.ok is True
    assert result.body == {"key": "value"}
    session.request.assert_called_once_with(
        "GET",
        "http://example.com/api",
        headers={"Authorization": "token"},
        json=None,
        timeout=None,
    )


def test_post_request_sends_params_as_body(session):
    session.request.return_value = _mock_response({"key": "value"})
    executor = RequestExecutor(session=session, timeout=5.0)
    endpoint = ApiEndpointConfig(
        name="B",
        url="http://example.com/api",
        method="POST",
        headers={"Content-Type": "application/json"},
        params={"param": "value"},
    )

    executor.execute(endpoint, "v1")

    call = session.request.call_args
    assert call.args == ("POST", "http://example.com/api")
    assert call.kwargs["json"] == {"param": "value"}
    assert call.kwargs["headers"] == {"Content-Type": "application/json"}
    assert call.kwargs["timeout"] == 5.0


def test_non_json_body_kept_as_text(session):
    session.request.return_value = _mock_response(text="plain text")
    executor = RequestExecutor(session=session)

    result = executor.execute(ApiEndpointConfig(name="A", url="http://x"), "v1")

    assert result.ok is True
    assert result.body == "plain text"


def test_falsy_json_body_is_a_success(session):
    session.request.return_value = _mock_response([])
    executor = RequestExecutor(session=session)

    result = executor.execute(ApiEndpointConfig(name="A", url="http://x"), "v1")

    assert result.ok is True
    assert result.body == []


def test_elapsed_time_recorded(session):
    session.request.return_value = _mock_response({"ok": True})
    executor = RequestExecutor(session=session)

    with patch("api_regression.api.request_executor._elapsed_ms", return_value=250):
        result = executor.execute(ApiEndpointConfig(name="A", url="http://x"), "v1")

    assert result.elapsed_ms == 250


def test_connection_error_returns_failure(session, caplog):
    session.request.side_effect = requests.ConnectionError("connection refused")
    executor = RequestExecutor(session=session)

    with caplog.at_level(logging.ERROR):
        result = executor.execute(ApiEndpointConfig(name="A", url="http://example.com/api"), "v1")

    assert result.ok is False
    assert result.failure.reason is FailureReason.CONNECTION
    assert isinstance(result.elapsed_ms, int)
    assert result.elapsed_ms >= 0

    entries = [json.loads(r.getMessage()) for r in caplog.records]
    failure_logs = [e for e in entries if e["level"] == "ERROR"]
    assert failure_logs[0]["message"] == "Failed to fetch data from v1 http://example.com/api"
    assert "connection refused" in failure_logs[0]["error"]


def test_http_error_status_returns_failure(session):
    response = _mock_response({"error": "boom"}, status_code=500)
    response.raise_for_status.side_effect = requests.HTTPError(
        "500 Server Error", response=response
    )
    session.request.return_value = response
    executor = RequestExecutor(session=session)

    result = executor.execute(ApiEndpointConfig(name="A", url="http://x"), "v2")

    assert result.ok is False
    assert result.failure.reason is FailureReason.HTTP_STATUS
    assert result.failure.status_code == 500


def test_timeout_returns_failure(session):
    session.request.side_effect = requests.Timeout("read timed out")
    executor = RequestExecutor(session=session, timeout=0.1)

    result = executor.execute(ApiEndpointConfig(name="A", url="http://x"), "v1")

    assert result.failure.reason is FailureReason.TIMEOUT


def test_success_logs_progress(session, caplog):
    session.request.return_value = _mock_response({"ok": True})
    executor = RequestExecutor(session=session)

    with caplog.at_level(logging.INFO):
        executor.execute(ApiEndpointConfig(name="A", url="http://example.com/a"), "v1")

    messages = [json.loads(r.getMessage())["message"] for r in caplog.records]
    assert "Fetched response from v1 http://example.com/a" in messages
