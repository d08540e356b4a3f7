"""
Configuration loader for the API regression toolkit.

Reads runtime settings from environment variables, loads endpoint config
documents (JSON or YAML) with schema validation, and keeps forwarded
header values out of the logs.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

import jsonschema
import requests
import yaml

from api_regression.api.request_executor import RequestExecutor
from api_regression.domain.endpoint import ApiConfigDocument
from api_regression.exceptions import ConfigNotFoundError, ConfigurationError
from api_regression.utils.logger import ROOT_LOGGER_NAME, get_logger

logger = get_logger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "api_config.schema.json"

OUTPUT_ROOT_ENV = "API_REGRESSION_OUTPUT_ROOT"
REQUEST_TIMEOUT_ENV = "API_REGRESSION_REQUEST_TIMEOUT"
LOG_LEVEL_ENV = "API_REGRESSION_LOG_LEVEL"

DEFAULT_OUTPUT_ROOT = "apiResponses"
DEFAULT_LOG_LEVEL = "INFO"

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class SecretRedactionFilter(logging.Filter):
    """
    Logging filter that redacts secret values from log records.
    Replaces secret substrings with ***REDACTED*** to prevent accidental leakage.
    """

    def __init__(self, secrets: Optional[Iterable[str]] = None):
        """
        Initialize filter with secrets to redact.

        Args:
            secrets: Values to mask (e.g. Authorization header values)
        """
        super().__init__()
        self.redacted_values: set[str] = set()
        self.add_secrets(secrets or [])

    def add_secrets(self, secrets: Iterable[str]) -> None:
        for value in secrets:
            # Only redact strings with meaningful length
            if isinstance(value, str) and len(value) > 3:
                self.redacted_values.add(value)

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter and redact log record."""
        if not self.redacted_values:
            return True
        record.msg = self._redact_string(str(record.msg))
        if record.args:
            if isinstance(record.args, dict):
                record.args = {k: self._redact_string(str(v)) for k, v in record.args.items()}
            else:
                record.args = tuple(self._redact_string(str(arg)) for arg in record.args)
        return True

    def _redact_string(self, text: str) -> str:
        """Redact all secret values from string."""
        # Longest first so a secret containing another is fully masked
        for secret in sorted(self.redacted_values, key=len, reverse=True):
            if secret in text:
                text = text.replace(secret, "***REDACTED***")
        return text


def setup_logging_redaction(secrets: Iterable[str]) -> SecretRedactionFilter:
    """
    Install (or extend) the redaction filter on the package log handlers.

    Handler filters apply to records propagated from every module logger.
    """
    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    secrets = list(secrets)
    installed: Optional[SecretRedactionFilter] = None
    for handler in package_logger.handlers:
        existing = next(
            (f for f in handler.filters if isinstance(f, SecretRedactionFilter)), None
        )
        if existing is None:
            existing = SecretRedactionFilter(secrets)
            handler.addFilter(existing)
        else:
            existing.add_secrets(secrets)
        installed = existing
    return installed or SecretRedactionFilter(secrets)


def _read_schema() -> Dict[str, Any]:
    with SCHEMA_PATH.open("r", encoding="utf-8") as f:
        return json.load(f)


def load_config(file_path: Union[str, Path]) -> Any:
    """
    Read and parse a config file.

    Files ending in .yaml/.yml are parsed as YAML, everything else as JSON.

    Args:
        file_path: Path to the config document

    Returns:
        Parsed document

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigurationError: If the file cannot be parsed
    """
    path = Path(file_path)
    if not path.is_file():
        logger.error(
            f"Config file not found: {file_path}",
            operation="load_config",
            context={"path": str(file_path)},
        )
        raise ConfigNotFoundError(str(file_path))

    try:
        with path.open("r", encoding="utf-8") as f:
            if path.suffix.lower() in (".yaml", ".yml"):
                return yaml.safe_load(f)
            return json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in config file: {file_path}", error=str(e))
        raise ConfigurationError(f"Invalid JSON in {file_path}: {e}") from e
    except yaml.YAMLError as e:
        logger.error(f"Invalid YAML in config file: {file_path}", error=str(e))
        raise ConfigurationError(f"Invalid YAML in {file_path}: {e}") from e
    except UnicodeDecodeError as e:
        logger.error(f"Config file is not valid UTF-8: {file_path}", error=str(e))
        raise ConfigurationError(f"Config file {file_path} is not valid UTF-8: {e}") from e


def load_api_config(file_path: Union[str, Path]) -> ApiConfigDocument:
    """
    Load an endpoint config document and validate it against the bundled schema.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigurationError: If the file is unparsable or fails validation
    """
    document = load_config(file_path)

    try:
        jsonschema.validate(instance=document, schema=_read_schema())
    except jsonschema.ValidationError as e:
        logger.error(
            "Config document failed schema validation",
            operation="load_api_config",
            context={"path": str(file_path), "field": list(e.absolute_path)},
            error=e.message,
        )
        raise ConfigurationError(f"Config validation failed for {file_path}: {e.message}") from e

    config = ApiConfigDocument.from_dict(document, source_path=str(file_path))
    for name in config.duplicate_names():
        logger.warning(
            f"Duplicate API name '{name}'; later responses overwrite {name}.json",
            operation="load_api_config",
            context={"path": str(file_path), "api_name": name},
        )

    logger.debug(
        f"Loaded {len(config.apis)} APIs for version {config.version}",
        operation="load_api_config",
        context={"path": str(file_path)},
    )
    return config


class Settings:
    """
    Runtime settings read from the environment at construction.

    Builds the HTTP session and request executor explicitly; nothing is
    shared through module-level state.
    """

    def __init__(
        self,
        output_root: Optional[str] = None,
        request_timeout: Optional[float] = None,
        log_level: Optional[str] = None,
        environ: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize settings; explicit arguments win over environment variables.

        Args:
            output_root: Root directory for per-version response folders
            request_timeout: Per-request timeout in seconds (None waits indefinitely)
            log_level: Logging level name
            environ: Environment mapping (defaults to os.environ)

        Raises:
            ConfigurationError: If an environment value is invalid
        """
        env = os.environ if environ is None else environ

        self.output_root = Path(output_root or env.get(OUTPUT_ROOT_ENV) or DEFAULT_OUTPUT_ROOT)
        self.request_timeout = (
            request_timeout
            if request_timeout is not None
            else self._parse_timeout(env.get(REQUEST_TIMEOUT_ENV))
        )
        self.log_level = self._parse_log_level(log_level or env.get(LOG_LEVEL_ENV))

    @staticmethod
    def _parse_timeout(raw: Optional[str]) -> Optional[float]:
        if raw is None or raw.strip() == "":
            return None
        try:
            timeout = float(raw)
        except ValueError as e:
            raise ConfigurationError(f"{REQUEST_TIMEOUT_ENV} must be a number, got {raw!r}") from e
        if timeout <= 0:
            raise ConfigurationError(f"{REQUEST_TIMEOUT_ENV} must be positive, got {raw!r}")
        return timeout

    @staticmethod
    def _parse_log_level(raw: Optional[str]) -> str:
        level = (raw or DEFAULT_LOG_LEVEL).strip().upper()
        if level not in _VALID_LOG_LEVELS:
            raise ConfigurationError(
                f"{LOG_LEVEL_ENV} must be one of {sorted(_VALID_LOG_LEVELS)}, got {raw!r}"
            )
        return level

    def output_dir_for(self, version: str) -> Path:
        """Directory that receives the responses of one version."""
        return self.output_root / version

    def create_session(self) -> requests.Session:
        return requests.Session()

    def create_executor(self, session: Optional[requests.Session] = None) -> RequestExecutor:
        return RequestExecutor(
            session=session or self.create_session(), timeout=self.request_timeout
        )
