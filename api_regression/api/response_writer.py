"""
Fetch batch orchestration and response persistence.

Runs every endpoint of one config document in order, writes each
successful body to ``<output_dir>/<name>.json`` and appends one row per
call to ``response_times.csv``.
"""

import csv
import json
from pathlib import Path
from typing import Optional, Union

from api_regression.api.request_executor import RequestExecutor
from api_regression.config.settings import Settings, load_api_config, setup_logging_redaction
from api_regression.domain.endpoint import JsonValue
from api_regression.domain.results import BatchSummary, TimingRecord
from api_regression.exceptions import ConfigurationError
from api_regression.utils.logger import get_logger, log_operation

logger = get_logger(__name__)

TIMING_REPORT_FILENAME = "response_times.csv"
TIMING_REPORT_HEADER = ["API名", "レスポンス時間(ms)"]


def save_api_response_to_file(response: JsonValue, file_path: Union[str, Path]) -> Path:
    """
    Write a response body as 2-space indented JSON.

    Args:
        response: Parsed response body
        file_path: Destination file

    Returns:
        Path that was written
    """
    path = Path(file_path)
    path.write_text(json.dumps(response, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.info(f"Response saved to {path}", operation="save_api_response")
    return path


class TimingReport:
    """Append-only CSV of per-call response times."""

    def __init__(self, output_dir: Union[str, Path]):
        self.path = Path(output_dir) / TIMING_REPORT_FILENAME

    def write_header(self) -> None:
        """Start a fresh report (truncates any previous run)."""
        with self.path.open("w", encoding="utf-8", newline="") as f:
            csv.writer(f, lineterminator="\n").writerow(TIMING_REPORT_HEADER)

    def append(self, record: TimingRecord) -> None:
        with self.path.open("a", encoding="utf-8", newline="") as f:
            csv.writer(f, lineterminator="\n").writerow(record.as_row())


@log_operation("fetch_batch")
def run_fetch_batch(
    config_path: Union[str, Path],
    output_dir: Union[str, Path],
    executor: RequestExecutor,
) -> BatchSummary:
    """
    Fetch and persist every endpoint of one config document, sequentially.

    The output directory must already exist.

    Args:
        config_path: Path to the endpoint config document
        output_dir: Directory receiving response files and the timing report
        executor: Executor bound to an HTTP session

    Returns:
        BatchSummary describing timings, saved files and failures

    Raises:
        ConfigNotFoundError: If the config file does not exist
        ConfigurationError: If the config cannot be parsed or validated
    """
    config = load_api_config(config_path)
    setup_logging_redaction(config.credential_header_values())

    output_dir = Path(output_dir)
    summary = BatchSummary(version=config.version, output_dir=output_dir)

    timing_report = TimingReport(output_dir)
    timing_report.write_header()

    for api in config.apis:
        result = executor.execute(api, config.version)

        record = TimingRecord(api_name=api.name, elapsed_ms=result.elapsed_ms)
        timing_report.append(record)
        summary.timings.append(record)

        if not result.ok:
            summary.failures.append(api.name)
            continue

        target = output_dir / f"{api.name}.json"
        try:
            saved = save_api_response_to_file(result.body, target)
        except OSError as e:
            logger.error(
                f"Failed to save response of {api.name} to {target}",
                operation="save_api_response",
                context={"api_name": api.name, "version": config.version},
                error=str(e),
            )
            summary.failures.append(api.name)
            continue
        summary.saved_files.append(saved)

    logger.info(
        f"Fetched {len(summary.saved_files)}/{len(config.apis)} APIs for version {config.version}",
        operation="fetch_batch",
        context={"output_dir": str(output_dir), "failures": summary.failures},
    )
    return summary


def fetch_and_save_api_responses(
    config_path: Union[str, Path],
    output_dir: Union[str, Path],
    executor: Optional[RequestExecutor] = None,
) -> bool:
    """
    Run a fetch batch and report whether it could start.

    Per-endpoint failures do not make the batch fail; only a config that
    cannot be loaded does.

    Returns:
        True when the config loaded and every endpoint was attempted
    """
    owns_executor = executor is None
    if executor is None:
        executor = Settings().create_executor()

    try:
        run_fetch_batch(config_path, output_dir, executor)
    except ConfigurationError as e:
        logger.error(
            "Aborting fetch batch: configuration could not be loaded",
            operation="fetch_batch",
            context={"config_path": str(config_path)},
            error=str(e),
        )
        return False
    finally:
        if owns_executor:
            executor.session.close()
    return True
