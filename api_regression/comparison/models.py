"""Comparison result models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from api_regression.comparison.structural_diff import DiffRecord


class ComparisonOutcome(Enum):
    """Result of comparing one filename across the two versions."""

    MATCH = "match"
    DIFFERENT = "different"
    MISSING_IN_V1 = "missing_in_v1"
    MISSING_IN_V2 = "missing_in_v2"
    BOTH_MISSING = "both_missing"
    UNREADABLE = "unreadable"


@dataclass
class PairComparison:
    """Comparison of one response file pair."""

    filename: str
    file1: str
    file2: str
    outcome: ComparisonOutcome
    differences: List[DiffRecord] = field(default_factory=list)
    unreadable_file: Optional[str] = None
    error: Optional[str] = None

    @property
    def is_match(self) -> bool:
        return self.outcome is ComparisonOutcome.MATCH

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: Dict[str, Any] = {
            "filename": self.filename,
            "file1": self.file1,
            "file2": self.file2,
            "outcome": self.outcome.value,
            "difference_count": len(self.differences),
        }
        if self.differences:
            data["differences"] = [record.to_dict() for record in self.differences]
        if self.error:
            data["unreadable_file"] = self.unreadable_file
            data["error"] = self.error
        return data
