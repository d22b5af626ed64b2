"""
Repository-level pytest configuration.

Why this exists:
  - Provide predictable defaults for report locations and log level
  - Make pytester available to the plugin tests
  - Keep behavior explicit and discoverable
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest

pytest_plugins = ["pytester"]


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _report_env_defaults(project_root: Path) -> Generator[None, None, None]:
    """
    Set reporting environment defaults if not already provided by the user/CI.
    """
    defaults = {
        "REPORTS_DIR": str(project_root / "reports" / "execution"),
        "LOG_LEVEL": "INFO",
    }

    for k, v in defaults.items():
        os.environ.setdefault(k, v)

    yield
