"""
================================================================================
Reporting Unit Test Configuration
================================================================================

Shared fixtures for the reporting engine unit tests.

Fixtures:
    - fixed_clock: Deterministic clock for suite start/end times
    - reports_dir: Temporary reports directory
    - listener: LifecycleListener wired to fixed_clock and reports_dir
    - log_messages: Captured loguru messages
    - isolated_config: Configuration reloaded from a temporary working dir

================================================================================
"""

from __future__ import annotations

from datetime import datetime, timedelta
from pathlib import Path
from typing import Generator, List

import pytest
from loguru import logger

from autotest_reporting import common
from autotest_reporting.listener import LifecycleListener

SUITE_START = datetime(2024, 3, 15, 10, 30, 0)


class FixedClock:
    """Returns start, then start + step, start + 2*step, ... on each call."""

    def __init__(self, start: datetime = SUITE_START, step: timedelta = timedelta(seconds=2)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value


@pytest.fixture
def fixed_clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def reports_dir(tmp_path: Path) -> Path:
    return tmp_path / "reports" / "execution"


@pytest.fixture
def listener(fixed_clock: FixedClock, reports_dir: Path) -> LifecycleListener:
    return LifecycleListener(reports_dir=reports_dir, clock=fixed_clock)


@pytest.fixture
def log_messages() -> Generator[List[str], None, None]:
    """Capture loguru messages (message text only) for the duration of a test."""
    messages: List[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch) -> Generator[Path, None, None]:
    """
    Run with a clean working directory and no reporting env overrides.

    Yields the working directory; tests may create config/reporting.yaml
    in it before calling common.reload_config().
    """
    monkeypatch.chdir(tmp_path)
    for env_key in common.ENV_MAPPING:
        monkeypatch.delenv(env_key, raising=False)
    common.reload_config()
    yield tmp_path
    monkeypatch.undo()
    common.reload_config()
