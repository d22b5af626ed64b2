"""
================================================================================
Reporting Common Utilities
================================================================================

Shared configuration management and logging setup for the reporting engine.

Exports:
    - get_config: Read a configuration value by dot-notation key
    - set_config: Override a configuration value at runtime
    - reload_config: Drop cached configuration and load it again
    - init_logger: Initialize the loguru logger with standard settings
    - ensure_directory: Create a directory (and parents) if missing

Usage:
    from autotest_reporting.common import get_config, init_logger

    init_logger()
    reports_dir = get_config("reporting.reports_dir", "reports/execution")

================================================================================
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from loguru import logger

from autotest_reporting.errors import ConfigurationError

# ============================================================
# Configuration Management
# ============================================================

PACKAGE_CONFIG_PATH = Path(__file__).parent.parent / "config" / "reporting.yaml"

# Environment variables that override file-based configuration
ENV_MAPPING = {
    "REPORTS_DIR": "reporting.reports_dir",
    "REPORT_SUITE_NAME": "reporting.suite_name",
    "LOG_LEVEL": "logging.level",
    "LOG_FILE": "logging.file",
}

_config: Dict[str, Any] = {}
_config_loaded: bool = False


def _config_paths() -> list:
    """Candidate configuration files, highest priority first."""
    return [
        Path("config") / "reporting.yaml",
        PACKAGE_CONFIG_PATH,
    ]


def _load_config() -> None:
    """
    Loads configuration from the first YAML file found, then applies
    environment variable overrides.
    """
    global _config, _config_loaded

    _config = {}
    for config_path in _config_paths():
        if not config_path.exists():
            continue
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                _config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file {config_path}: {e}"
            ) from e
        logger.debug(f"Loaded configuration from {config_path}")
        break

    for env_key, config_key in ENV_MAPPING.items():
        if env_key in os.environ:
            _set_nested(_config, config_key.split("."), os.environ[env_key])

    _config_loaded = True


def _ensure_config_loaded() -> None:
    if not _config_loaded:
        _load_config()


def _set_nested(d: Dict, keys: list, value: Any) -> None:
    """
    Sets a nested dictionary value using a list of keys.
    """
    for key in keys[:-1]:
        if not isinstance(d.get(key), dict):
            d[key] = {}
        d = d[key]
    d[keys[-1]] = value


def get_config(key: str, default: Any = None) -> Any:
    """
    Retrieves a configuration value using a dot-separated key path.

    Args:
        key: Dot-separated key path (e.g., "reporting.reports_dir")
        default: Default value to return if key is not found

    Returns:
        The configuration value, or the default if not found

    Example:
        reports_dir = get_config("reporting.reports_dir", "reports/execution")
    """
    _ensure_config_loaded()

    value = _config
    for k in key.split("."):
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default
    return value


def set_config(key: str, value: Any) -> None:
    """
    Sets a configuration value at runtime.

    Args:
        key: Dot-separated key path
        value: Value to set
    """
    _ensure_config_loaded()
    _set_nested(_config, key.split("."), value)


def reload_config() -> None:
    """
    Reloads the configuration from files and environment.
    """
    global _config_loaded
    _config_loaded = False
    _load_config()
    logger.info("Configuration reloaded.")


# ============================================================
# Logging Setup
# ============================================================

DEFAULT_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<level>{message}</level>"
)

_logger_initialized = False


def init_logger(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    log_file: Optional[str] = None,
) -> None:
    """
    Initializes the loguru logger with standard settings.

    Each record is written to a sink in a single call under loguru's
    handler lock, so report lines emitted from worker threads never
    interleave.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to config value.
        format_string: Log format string. Uses default if not provided.
        log_file: Optional file path to write logs to.

    Example:
        init_logger()  # Use defaults
        init_logger(level="DEBUG", log_file="logs/execution.log")
    """
    global _logger_initialized

    if _logger_initialized:
        return

    logger.remove()

    level = (level or get_config("logging.level", "INFO")).upper()
    format_string = format_string or get_config("logging.format", DEFAULT_LOG_FORMAT)

    logger.add(
        sys.stderr,
        format=format_string,
        level=level,
        colorize=True,
    )

    log_file = log_file or get_config("logging.file")
    if log_file:
        ensure_directory(Path(log_file).parent)
        logger.add(
            log_file,
            format=format_string,
            level=level,
            encoding="utf-8",
            rotation=get_config("logging.rotation", "10 MB"),
            retention=get_config("logging.retention", "7 days"),
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {level}")


# ============================================================
# Common Utilities
# ============================================================

def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensures a directory exists, creating it and its parents if necessary.

    Args:
        path: Directory path

    Returns:
        The path (for chaining)
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


__all__ = [
    "get_config",
    "set_config",
    "reload_config",
    "init_logger",
    "ensure_directory",
    "DEFAULT_LOG_FORMAT",
]
