"""Unit tests for endpoint config and fetch result domain models."""

from pathlib import Path

import pytest

from api_regression.domain import (
    ApiConfigDocument,
    ApiEndpointConfig,
    BatchSummary,
    FailureReason,
    FetchFailure,
    FetchResult,
    TimingRecord,
)


class TestApiEndpointConfig:
    def test_from_dict_defaults(self):
        endpoint = ApiEndpointConfig.from_dict({"name": "A", "url": "http://x/y"})

        assert endpoint.method == "GET"
        assert endpoint.headers == {}
        assert endpoint.params is None

    def test_method_is_upper_cased(self):
        endpoint = ApiEndpointConfig.from_dict({"name": "A", "url": "http://x", "method": "post"})
        assert endpoint.method == "POST"

    def test_header_values_are_strings(self):
        endpoint = ApiEndpointConfig.from_dict(
            {"name": "A", "url": "http://x", "headers": {"X-Retry": 3}}
        )
        assert endpoint.headers == {"X-Retry": "3"}

    def test_get_has_no_body(self):
        endpoint = ApiEndpointConfig(name="A", url="http://x", params={"q": 1})
        assert endpoint.request_body() is None

    @pytest.mark.parametrize("method", ["POST", "PUT", "PATCH", "DELETE"])
    def test_non_get_sends_params(self, method):
        endpoint = ApiEndpointConfig(name="A", url="http://x", method=method, params={"q": 1})
        assert endpoint.request_body() == {"q": 1}

    def test_non_get_without_params_sends_empty_object(self):
        endpoint = ApiEndpointConfig(name="A", url="http://x", method="POST")
        assert endpoint.request_body() == {}

    def test_to_dict_round_trips_config_entry(self):
        entry = {
            "name": "search",
            "url": "http://x/search",
            "method": "POST",
            "headers": {"Content-Type": "application/json"},
            "params": {"q": "shoes"},
        }
        assert ApiEndpointConfig.from_dict(entry).to_dict() == entry

    def test_is_immutable(self):
        endpoint = ApiEndpointConfig(name="A", url="http://x")
        with pytest.raises(AttributeError):
            endpoint.name = "B"


class TestApiConfigDocument:
    def test_preserves_api_order(self):
        config = ApiConfigDocument.from_dict(
            {
                "version": "v1",
                "apis": [
                    {"name": "second", "url": "http://x/2"},
                    {"name": "first", "url": "http://x/1"},
                ],
            }
        )
        assert [api.name for api in config.apis] == ["second", "first"]

    def test_duplicate_names(self):
        config = ApiConfigDocument.from_dict(
            {
                "version": "v1",
                "apis": [
                    {"name": "a", "url": "http://x/1"},
                    {"name": "b", "url": "http://x/2"},
                    {"name": "a", "url": "http://x/3"},
                    {"name": "a", "url": "http://x/4"},
                ],
            }
        )
        assert config.duplicate_names() == ["a"]

    def test_credential_header_values(self):
        config = ApiConfigDocument.from_dict(
            {
                "version": "v1",
                "apis": [
                    {
                        "name": "a",
                        "url": "http://x",
                        "headers": {
                            "Authorization": "Bearer t",
                            "Content-Type": "application/json",
                        },
                    },
                    {
                        "name": "b",
                        "url": "http://x",
                        "headers": {
                            "X-Api-Key": "k",
                            "X-Auth-Token": "tok",
                            "Cookie": "sid=1",
                            "Keep-Alive": "timeout=5",
                            "Accept": "application/json",
                        },
                    },
                ],
            }
        )
        assert config.credential_header_values() == ["Bearer t", "k", "tok", "sid=1"]


class TestFetchResult:
    def test_success_with_null_body_is_ok(self):
        result = FetchResult.success("A", None, 12)
        assert result.ok is True
        assert result.body is None

    def test_failed_result(self):
        failure = FetchFailure(FailureReason.HTTP_STATUS, "500 Server Error", 500)
        result = FetchResult.failed("A", failure, 30)

        assert result.ok is False
        assert result.failure.status_code == 500
        assert result.elapsed_ms == 30


def test_timing_record_row():
    assert TimingRecord("A", 42).as_row() == ["A", "42"]


def test_batch_summary_to_dict():
    summary = BatchSummary(version="v1", output_dir=Path("out/v1"))
    summary.timings.append(TimingRecord("A", 5))
    summary.saved_files.append(Path("out/v1/A.json"))

    data = summary.to_dict()

    assert data["output_dir"] == "out/v1"
    assert data["saved_files"] == ["out/v1/A.json"]
    assert data["timings"] == [{"api_name": "A", "elapsed_ms": 5}]
