"""
================================================================================
Reporting Errors
================================================================================

Exception hierarchy for the execution reporting engine.

    ReportingError
    ├── LifecycleError      - callback received out of state order (usage error)
    ├── ReportWriteError    - report directory/file could not be written
    └── ConfigurationError  - reporting configuration could not be loaded

================================================================================
"""


class ReportingError(Exception):
    """Base class for all reporting engine errors."""
    pass


class LifecycleError(ReportingError):
    """
    Raised when a lifecycle callback arrives in the wrong state.

    Examples: a per-test event before the suite started, a second suite
    start without a finish in between, or a second suite finish.
    """
    pass


class ReportWriteError(ReportingError):
    """Raised (or returned) when the HTML report cannot be persisted."""

    def __init__(self, message: str, path=None):
        super().__init__(message)
        self.path = path


class ConfigurationError(ReportingError):
    """Raised when configuration loading fails."""
    pass


__all__ = [
    "ReportingError",
    "LifecycleError",
    "ReportWriteError",
    "ConfigurationError",
]
