"""Comparison module - structural diffs of saved API responses."""

from api_regression.comparison.comparator import (
    compare_api_responses,
    compare_directories,
    load_api_response,
)
from api_regression.comparison.diff_reporter import DiffReporter
from api_regression.comparison.models import ComparisonOutcome, PairComparison
from api_regression.comparison.structural_diff import DiffRecord, structural_diff

__all__ = [
    "compare_api_responses",
    "compare_directories",
    "load_api_response",
    "DiffReporter",
    "ComparisonOutcome",
    "PairComparison",
    "DiffRecord",
    "structural_diff",
]
