#!/usr/bin/env python3
"""
Fetch API responses for one version.

Usage:
    api-regression-fetch <version> <configFilePath> [--output-root apiResponses]

Writes one ``<name>.json`` per endpoint plus ``response_times.csv`` into
``<output-root>/<version>/``.

Environment:
    API_REGRESSION_OUTPUT_ROOT      default output root (apiResponses)
    API_REGRESSION_REQUEST_TIMEOUT  per-request timeout in seconds
    API_REGRESSION_LOG_LEVEL        DEBUG, INFO, WARNING, ERROR
"""

import argparse
import sys
from typing import List, Optional

from api_regression.api.response_writer import fetch_and_save_api_responses
from api_regression.config.settings import Settings
from api_regression.exceptions import ConfigurationError
from api_regression.utils.logger import configure_logging

USAGE = "Usage: api-regression-fetch <version> <configFilePath>"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="api-regression-fetch",
        description="Fetch configured API responses for one version and save them to disk.",
    )
    parser.add_argument("version", nargs="?", help="Version label, e.g. v1")
    parser.add_argument("config_path", nargs="?", help="Endpoint config file (JSON or YAML)")
    parser.add_argument(
        "--output-root",
        default=None,
        help="Directory holding one response folder per version (default: apiResponses)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if not args.version or not args.config_path:
        print(USAGE, file=sys.stderr)
        return 1

    try:
        settings = Settings(output_root=args.output_root)
    except ConfigurationError as e:
        print(str(e), file=sys.stderr)
        return 1

    configure_logging(settings.log_level)

    output_dir = settings.output_dir_for(args.version)
    output_dir.mkdir(parents=True, exist_ok=True)

    executor = settings.create_executor()
    try:
        succeeded = fetch_and_save_api_responses(args.config_path, output_dir, executor)
    finally:
        executor.session.close()

    return 0 if succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
