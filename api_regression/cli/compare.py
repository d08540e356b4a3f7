#!/usr/bin/env python3
"""
Compare saved API responses of two versions.

Usage:
    api-regression-compare <dir1> <dir2> [--report-dir comparison-report]

Prints one report per filename. Differences do not change the exit code;
only missing arguments or directories exit with 1.
"""

import argparse
import os
import sys
from typing import List, Optional

from api_regression.comparison.comparator import compare_directories
from api_regression.comparison.diff_reporter import DiffReporter
from api_regression.config.settings import Settings
from api_regression.exceptions import ConfigurationError
from api_regression.utils.logger import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="api-regression-compare",
        description="Structurally compare same-named response files in two directories.",
    )
    parser.add_argument("dir1", nargs="?", help="Version 1 response directory")
    parser.add_argument("dir2", nargs="?", help="Version 2 response directory")
    parser.add_argument(
        "--report-dir",
        default=None,
        help="Also write comparison_summary.json and SUMMARY.md into this directory",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if not args.dir1 or not args.dir2:
        print("Please provide two directories as arguments (e.g., v1 and v2)", file=sys.stderr)
        return 1

    for directory in (args.dir1, args.dir2):
        if not os.path.isdir(directory):
            print(f"Directory not found: {directory}", file=sys.stderr)
            return 1

    try:
        settings = Settings()
    except ConfigurationError as e:
        print(str(e), file=sys.stderr)
        return 1

    configure_logging(settings.log_level)

    reporter = DiffReporter()
    comparisons = compare_directories(args.dir1, args.dir2, reporter)

    if args.report_dir:
        reporter.write_summary(args.report_dir, args.dir1, args.dir2, comparisons)

    return 0


if __name__ == "__main__":
    sys.exit(main())
