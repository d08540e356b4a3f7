"""Domain models for endpoint configs and fetch results."""

from .endpoint import ApiConfigDocument, ApiEndpointConfig, JsonValue
from .results import BatchSummary, FailureReason, FetchFailure, FetchResult, TimingRecord

__all__ = [
    "ApiConfigDocument",
    "ApiEndpointConfig",
    "JsonValue",
    "BatchSummary",
    "FailureReason",
    "FetchFailure",
    "FetchResult",
    "TimingRecord",
]
