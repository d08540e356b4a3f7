"""
Response comparator.

Pairs response files across two version directories by filename and
reports, for each pair, a match, a structural diff, or the missing side.
"""

import json
import os
from pathlib import Path
from typing import Any, List, Optional, Tuple, Union

from api_regression.comparison.diff_reporter import DiffReporter
from api_regression.comparison.models import ComparisonOutcome, PairComparison
from api_regression.comparison.structural_diff import structural_diff
from api_regression.exceptions import DirectoryNotFoundError
from api_regression.utils.logger import get_logger, log_operation

logger = get_logger(__name__)

PathLike = Union[str, Path]

# Returned by the loader for an absent file; a JSON null body loads as None
MISSING = object()


def load_api_response(file_path: PathLike, default: Any = None) -> Any:
    """
    Load a response file as JSON.

    Args:
        file_path: Response file
        default: Value returned when the file does not exist

    Returns:
        Parsed JSON, or ``default`` if the file is absent

    Raises:
        ValueError: If the file is not valid JSON
        OSError: If the file exists but cannot be read
    """
    path = Path(file_path)
    if not path.exists():
        return default
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _load_side(file_path: str) -> Tuple[Any, Optional[str]]:
    try:
        return load_api_response(file_path, default=MISSING), None
    except (ValueError, OSError) as e:
        return None, str(e)


def compare_api_responses(
    file1: PathLike, file2: PathLike, reporter: Optional[DiffReporter] = None
) -> PairComparison:
    """
    Compare two response files and report the result.

    Priority: both missing, one missing, unreadable, then the structural diff.

    Args:
        file1: Response file from version 1
        file2: Response file from version 2
        reporter: Reporter receiving the result (stdout by default)

    Returns:
        PairComparison describing the outcome
    """
    reporter = reporter or DiffReporter()
    file1, file2 = str(file1), str(file2)
    filename = os.path.basename(file1) or os.path.basename(file2)

    response1, error1 = _load_side(file1)
    response2, error2 = _load_side(file2)

    if response1 is MISSING and response2 is MISSING:
        outcome = ComparisonOutcome.BOTH_MISSING
        comparison = PairComparison(filename, file1, file2, outcome)
    elif response1 is MISSING:
        comparison = PairComparison(filename, file1, file2, ComparisonOutcome.MISSING_IN_V1)
    elif response2 is MISSING:
        comparison = PairComparison(filename, file1, file2, ComparisonOutcome.MISSING_IN_V2)
    elif error1 or error2:
        unreadable, error = (file1, error1) if error1 else (file2, error2)
        logger.warning(
            f"Could not parse response file {unreadable}",
            operation="compare_api_responses",
            context={"file": unreadable},
            error=error,
        )
        comparison = PairComparison(
            filename,
            file1,
            file2,
            ComparisonOutcome.UNREADABLE,
            unreadable_file=unreadable,
            error=error,
        )
    else:
        differences = structural_diff(response1, response2)
        outcome = ComparisonOutcome.DIFFERENT if differences else ComparisonOutcome.MATCH
        comparison = PairComparison(filename, file1, file2, outcome, differences=differences)

    reporter.report(comparison)
    return comparison


@log_operation("compare_directories")
def compare_directories(
    dir1: PathLike, dir2: PathLike, reporter: Optional[DiffReporter] = None
) -> List[PairComparison]:
    """
    Compare same-named files of two response directories.

    Every filename from either listing is visited exactly once, in sorted
    order. No recursion and no extension filter.

    Args:
        dir1: Version 1 response directory
        dir2: Version 2 response directory
        reporter: Reporter receiving each result (stdout by default)

    Returns:
        One PairComparison per filename

    Raises:
        DirectoryNotFoundError: If either directory does not exist
    """
    reporter = reporter or DiffReporter()
    dir1, dir2 = str(dir1), str(dir2)

    for directory in (dir1, dir2):
        if not os.path.isdir(directory):
            raise DirectoryNotFoundError(directory)

    files1 = set(os.listdir(dir1))
    files2 = set(os.listdir(dir2))

    comparisons: List[PairComparison] = []
    for filename in sorted(files1 | files2):
        file1 = os.path.join(dir1, filename)
        file2 = os.path.join(dir2, filename)

        if filename not in files1:
            comparison = PairComparison(filename, file1, file2, ComparisonOutcome.MISSING_IN_V1)
            reporter.report(comparison)
        elif filename not in files2:
            comparison = PairComparison(filename, file1, file2, ComparisonOutcome.MISSING_IN_V2)
            reporter.report(comparison)
        else:
            comparison = compare_api_responses(file1, file2, reporter)

        comparisons.append(comparison)

    logger.info(
        f"Compared {len(comparisons)} files",
        operation="compare_directories",
        context={
            "dir1": dir1,
            "dir2": dir2,
            "matched": sum(1 for c in comparisons if c.is_match),
        },
    )
    return comparisons
