"""
================================================================================
Test Lifecycle Listener
================================================================================

Adapter between a test runner's lifecycle callbacks and the reporting
engine.

State machine:
    IDLE --on_suite_start--> RUNNING --on_suite_finish--> FINISHED
    FINISHED --on_suite_start--> RUNNING (with a fresh SuiteRun)

Per-test callbacks are only valid while RUNNING and may arrive
concurrently from worker threads. Anything out of order raises
LifecycleError; a second on_suite_finish is rejected the same way and
nothing is rendered again.

On suite finish the console report is logged first, then the HTML report
is rendered and written. A failed write is returned in the SuiteReport
and logged, it never hides the console report or the recorded outcomes.

Usage:
    listener = LifecycleListener(reports_dir="reports/execution")
    listener.on_suite_start("API Regression")
    listener.on_test_success("test_get_users", "List users", 120)
    report = listener.on_suite_finish("API Regression")

================================================================================
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Union

from loguru import logger

from autotest_reporting.common import get_config
from autotest_reporting.console_renderer import ConsoleRenderer
from autotest_reporting.errors import LifecycleError
from autotest_reporting.formatting import format_duration, format_timestamp, or_placeholder
from autotest_reporting.html_renderer import HtmlRenderer
from autotest_reporting.models import OutcomeRecord, SuiteSnapshot
from autotest_reporting.report_writer import ReportWriter, WriteResult
from autotest_reporting.suite import SuiteRun

DEFAULT_REPORTS_DIR = "reports/execution"
SEPARATOR = "─" * 80
BANNER = "=" * 80


def container_of(test_id: str) -> str:
    """Module or class part of a "path::Class::test" id; N/A for bare names."""
    container, _, _ = test_id.rpartition("::")
    return container or "N/A"


class ListenerState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    FINISHED = "finished"


@dataclass(frozen=True)
class SuiteReport:
    """Everything produced when a suite finishes."""

    suite_run: SuiteRun
    snapshot: SuiteSnapshot
    console_lines: List[str]
    html: str
    write_result: WriteResult

    @property
    def report_path(self) -> Optional[Path]:
        return self.write_result.path


class LifecycleListener:
    """
    Receives runner lifecycle events and drives aggregation and rendering.

    The listener owns no results itself: each on_suite_start creates a new
    SuiteRun, which is frozen by on_suite_finish.
    """

    def __init__(
        self,
        reports_dir: Optional[Union[str, Path]] = None,
        clock: Callable[[], datetime] = datetime.now,
        console_renderer: Optional[ConsoleRenderer] = None,
        html_renderer: Optional[HtmlRenderer] = None,
        report_writer: Optional[ReportWriter] = None,
    ):
        """
        Initialize listener.

        Args:
            reports_dir: Directory for HTML reports. Read from
                         "reporting.reports_dir" configuration if omitted.
            clock: Source of suite start/end timestamps
            console_renderer: Console report renderer
            html_renderer: HTML report renderer
            report_writer: HTML report writer
        """
        self._reports_dir = reports_dir
        self._clock = clock
        self._console_renderer = console_renderer or ConsoleRenderer()
        self._html_renderer = html_renderer or HtmlRenderer()
        self._report_writer = report_writer or ReportWriter()

        self._lock = threading.Lock()
        self._state = ListenerState.IDLE
        self._suite_run: Optional[SuiteRun] = None

    @property
    def state(self) -> ListenerState:
        return self._state

    @property
    def suite_run(self) -> Optional[SuiteRun]:
        """The current (or last finished) suite run."""
        return self._suite_run

    @property
    def reports_dir(self) -> Path:
        if self._reports_dir is not None:
            return Path(self._reports_dir)
        return Path(get_config("reporting.reports_dir", DEFAULT_REPORTS_DIR))

    # =========================================================================
    # Suite Events
    # =========================================================================

    def on_suite_start(self, suite_name: str) -> SuiteRun:
        with self._lock:
            if self._state is ListenerState.RUNNING:
                raise LifecycleError(
                    f"Suite '{suite_name}' started while "
                    f"'{self._suite_run.name}' is still running"
                )
            suite_run = SuiteRun(suite_name, self._clock())
            self._suite_run = suite_run
            self._state = ListenerState.RUNNING

        logger.info(BANNER)
        logger.info(f"TEST SUITE STARTED: {suite_name}")
        logger.info(f"Start Time: {format_timestamp(suite_run.start_time)}")
        logger.info(BANNER)
        return suite_run

    def on_suite_finish(self, suite_name: str) -> SuiteReport:
        """
        Freeze the suite run and produce both reports.

        Must be called once, after every worker callback for the suite has
        returned.

        Raises:
            LifecycleError: If no suite is running (including a repeated finish)
        """
        with self._lock:
            if self._state is not ListenerState.RUNNING:
                raise LifecycleError(
                    f"Suite finish for '{suite_name}' received in state {self._state.value}"
                )
            suite_run = self._suite_run
            snapshot = suite_run.finish(self._clock())
            self._state = ListenerState.FINISHED

        logger.info(BANNER)
        logger.info(f"TEST SUITE COMPLETED: {suite_run.name}")
        logger.info(f"End Time: {format_timestamp(suite_run.end_time)}")
        logger.info(BANNER)

        console_lines = self._console_renderer.render(suite_run, snapshot)
        for line in console_lines:
            logger.info(line)

        stats = snapshot.duration_stats()
        logger.debug(
            f"Summary: {snapshot.to_dict()} | duration min={stats.minimum}ms "
            f"max={stats.maximum}ms avg={stats.average:.1f}ms "
            f"total={format_duration(suite_run.duration_ms)}"
        )

        html = self._html_renderer.render(suite_run, snapshot)
        write_result = self._report_writer.write(
            html, self.reports_dir, timestamp=suite_run.end_time
        )
        if not write_result.ok:
            logger.warning(
                f"HTML report was not written; {snapshot.total} recorded outcomes "
                f"remain available in the console report"
            )

        return SuiteReport(
            suite_run=suite_run,
            snapshot=snapshot,
            console_lines=console_lines,
            html=html,
            write_result=write_result,
        )

    # =========================================================================
    # Test Events
    # =========================================================================

    def on_test_start(self, test_id: str, description: Optional[str] = None) -> None:
        self._require_running(f"test start for {test_id}")
        logger.info(f"▶ TEST STARTED: {test_id}")
        logger.info(f"  Description: {or_placeholder(description, 'N/A')}")
        logger.info(f"  Class: {container_of(test_id)}")

    def on_test_success(
        self,
        test_id: str,
        description: Optional[str],
        duration_ms: int,
    ) -> OutcomeRecord:
        suite_run = self._require_running(f"success for {test_id}")
        record = OutcomeRecord.passed(test_id, description, duration_ms)
        suite_run.record(record)
        logger.info(f"✓ TEST PASSED: {test_id} ({record.duration_ms}ms)")
        logger.info(SEPARATOR)
        return record

    def on_test_failure(
        self,
        test_id: str,
        description: Optional[str],
        duration_ms: int,
        error_message: Optional[str],
    ) -> OutcomeRecord:
        suite_run = self._require_running(f"failure for {test_id}")
        record = OutcomeRecord.failed(test_id, description, duration_ms, error_message)
        suite_run.record(record)
        logger.error(f"✗ TEST FAILED: {test_id} ({record.duration_ms}ms)")
        logger.error(f"  Error: {record.error_message}")
        logger.info(SEPARATOR)
        return record

    def on_test_skipped(
        self,
        test_id: str,
        description: Optional[str],
        cause: Optional[str] = None,
    ) -> OutcomeRecord:
        suite_run = self._require_running(f"skip for {test_id}")
        record = OutcomeRecord.skipped(test_id, description, cause)
        suite_run.record(record)
        logger.warning(f"⊗ TEST SKIPPED: {test_id} ({record.error_message})")
        logger.info(SEPARATOR)
        return record

    # =========================================================================
    # Internals
    # =========================================================================

    def _require_running(self, event: str) -> SuiteRun:
        with self._lock:
            if self._state is not ListenerState.RUNNING:
                raise LifecycleError(f"Received {event} in state {self._state.value}")
            return self._suite_run


__all__ = [
    "LifecycleListener",
    "ListenerState",
    "container_of",
    "SuiteReport",
    "DEFAULT_REPORTS_DIR",
]
