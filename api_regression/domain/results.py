"""
Result models for fetch batches.

A single call yields a FetchResult carrying either the parsed body or a
typed failure, always with its elapsed time.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from api_regression.domain.endpoint import JsonValue


class FailureReason(Enum):
    """Why a request produced no usable response."""

    CONNECTION = "connection"
    TIMEOUT = "timeout"
    HTTP_STATUS = "http_status"
    REQUEST = "request"


@dataclass(frozen=True)
class FetchFailure:
    """Typed description of a failed call."""

    reason: FailureReason
    message: str
    status_code: Optional[int] = None


@dataclass(frozen=True)
class FetchResult:
    """
    Outcome of one endpoint call.

    Exactly one of ``body`` (when ``failure`` is None) or ``failure`` is
    meaningful. A JSON ``null`` body is still a success.
    """

    api_name: str
    elapsed_ms: int
    body: JsonValue = None
    failure: Optional[FetchFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, api_name: str, body: JsonValue, elapsed_ms: int) -> "FetchResult":
        return cls(api_name=api_name, elapsed_ms=elapsed_ms, body=body)

    @classmethod
    def failed(cls, api_name: str, failure: FetchFailure, elapsed_ms: int) -> "FetchResult":
        return cls(api_name=api_name, elapsed_ms=elapsed_ms, failure=failure)


@dataclass(frozen=True)
class TimingRecord:
    """One row of the timing report."""

    api_name: str
    elapsed_ms: int

    def as_row(self) -> List[str]:
        return [self.api_name, str(self.elapsed_ms)]


@dataclass
class BatchSummary:
    """What a fetch batch did, in call order."""

    version: str
    output_dir: Path
    timings: List[TimingRecord] = field(default_factory=list)
    saved_files: List[Path] = field(default_factory=list)
    failures: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = asdict(self)
        data["output_dir"] = str(self.output_dir)
        data["saved_files"] = [str(path) for path in self.saved_files]
        return data
