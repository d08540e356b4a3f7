"""
Request executor for configured endpoints.

Performs one HTTP call per endpoint definition with an explicitly supplied
requests.Session. Failures are returned as FetchResult values so the
caller can keep going with the rest of the batch.
"""

import time
from typing import Optional

import requests

from api_regression.domain.endpoint import ApiEndpointConfig, JsonValue
from api_regression.domain.results import FailureReason, FetchFailure, FetchResult
from api_regression.utils.logger import get_logger, mask_secret

logger = get_logger(__name__)


def _elapsed_ms(start_time: float) -> int:
    return int((time.time() - start_time) * 1000)


def _classify_failure(error: requests.RequestException) -> FetchFailure:
    """Map a requests exception onto a typed failure reason."""
    if isinstance(error, requests.HTTPError):
        status_code = error.response.status_code if error.response is not None else None
        return FetchFailure(FailureReason.HTTP_STATUS, str(error), status_code)
    if isinstance(error, requests.Timeout):
        return FetchFailure(FailureReason.TIMEOUT, str(error))
    if isinstance(error, requests.ConnectionError):
        return FetchFailure(FailureReason.CONNECTION, str(error))
    return FetchFailure(FailureReason.REQUEST, str(error))


class RequestExecutor:
    """
    Executes endpoint calls one at a time.

    Attributes:
        session: requests.Session used for every call
        timeout: Per-request timeout in seconds; None waits indefinitely
    """

    def __init__(self, session: requests.Session, timeout: Optional[float] = None):
        self.session = session
        self.timeout = timeout

    @staticmethod
    def _parse_body(response: requests.Response) -> JsonValue:
        """Parsed JSON body, or the raw text when the body is not JSON."""
        try:
            return response.json()
        except ValueError:
            return response.text

    def execute(self, endpoint: ApiEndpointConfig, version: str) -> FetchResult:
        """
        Call one endpoint and time it.

        GET sends no body; every other method sends ``params`` as a JSON body.
        Headers are forwarded verbatim.

        Args:
            endpoint: Endpoint definition
            version: Version label, used in diagnostics

        Returns:
            FetchResult with the parsed body, or a typed failure
        """
        context = {
            "version": version,
            "api_name": endpoint.name,
            "method": endpoint.method,
            "url": endpoint.url,
        }
        logger.debug(
            f"Requesting {endpoint.method} {endpoint.url}",
            operation="fetch_api_response",
            context={
                **context,
                "headers": {k: mask_secret(v) for k, v in endpoint.headers.items()},
            },
        )

        start_time = time.time()
        try:
            response = self.session.request(
                endpoint.method,
                endpoint.url,
                headers=endpoint.headers,
                json=endpoint.request_body(),
                timeout=self.timeout,
            )
            response.raise_for_status()
            body = self._parse_body(response)
        except requests.RequestException as e:
            elapsed_ms = _elapsed_ms(start_time)
            failure = _classify_failure(e)
            logger.error(
                f"Failed to fetch data from {version} {endpoint.url}",
                operation="fetch_api_response",
                context={**context, "reason": failure.reason.value, "status_code": failure.status_code},
                error=str(e),
                duration_ms=elapsed_ms,
            )
            return FetchResult.failed(endpoint.name, failure, elapsed_ms)

        elapsed_ms = _elapsed_ms(start_time)
        logger.info(
            f"Fetched response from {version} {endpoint.url}",
            operation="fetch_api_response",
            context=context,
            duration_ms=elapsed_ms,
        )
        return FetchResult.success(endpoint.name, body, elapsed_ms)
