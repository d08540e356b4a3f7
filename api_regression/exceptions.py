"""
Custom exception hierarchy for the regression toolkit.

Only conditions that end a run are modelled as exceptions. Per-endpoint
request failures and per-file comparison problems are returned as values
so a single bad endpoint or corrupt file never aborts the batch.
"""


class ApiRegressionError(Exception):
    """
    Base exception for all toolkit errors.

    Callers at the CLI boundary catch this to translate failures into exit codes.
    """

    pass


class ConfigurationError(ApiRegressionError):
    """
    Raised when a config document or environment setting is unusable.

    Covers invalid JSON/YAML and documents that fail schema validation.
    """

    pass


class ConfigNotFoundError(ConfigurationError):
    """
    Raised when the config file for a fetch batch does not exist.

    Fatal to the batch: no request is attempted.
    """

    def __init__(self, path: str) -> None:
        super().__init__(f"Config file not found: {path}")
        self.path = path


class DirectoryNotFoundError(ApiRegressionError):
    """Raised when a response directory to compare does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Directory not found: {path}")
        self.path = path
