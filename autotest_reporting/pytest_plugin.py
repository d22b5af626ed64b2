"""
================================================================================
Execution Report Pytest Plugin
================================================================================

Connects pytest's hooks to the LifecycleListener.

    pytest_sessionstart       -> on_suite_start
    pytest_runtest_logstart   -> on_test_start
    pytest_runtest_logreport  -> on_test_success / on_test_failure / on_test_skipped
    pytest_sessionfinish      -> on_suite_finish

Setup, call and teardown reports of a test are folded into one outcome,
emitted when its teardown report arrives: failed if any phase failed,
skipped if setup or call was skipped, passed otherwise.

Under pytest-xdist the outcomes are consumed in the controller process;
workers only annotate their reports with the test description and error
message.

Usage:
    pytest -p autotest_reporting.pytest_plugin --execution-report
    pytest -p autotest_reporting.pytest_plugin --execution-report \\
        --reports-dir reports/execution --report-suite-name "API Regression"

================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

import allure
import pytest
from loguru import logger

from autotest_reporting.common import get_config, init_logger
from autotest_reporting.listener import LifecycleListener, SuiteReport
from autotest_reporting.models import TestStatus

PLUGIN_NAME = "execution_report"


# =============================================================================
# Options & Registration
# =============================================================================

def pytest_addoption(parser):
    group = parser.getgroup("execution-report", "Execution summary and HTML report")
    group.addoption(
        "--execution-report",
        action="store_true",
        default=False,
        help="Log a summary report and write an HTML report at session end",
    )
    group.addoption(
        "--reports-dir",
        default=None,
        help="Directory for HTML reports (default: reporting.reports_dir config)",
    )
    group.addoption(
        "--report-suite-name",
        default=None,
        help="Suite name shown in the reports (default: rootdir name)",
    )


def pytest_configure(config):
    if not config.getoption("execution_report"):
        return
    init_logger()
    # xdist workers only annotate reports; the controller aggregates
    if hasattr(config, "workerinput"):
        return
    config.pluginmanager.register(ReportingPlugin(config), PLUGIN_NAME)


def pytest_unconfigure(config):
    plugin = config.pluginmanager.get_plugin(PLUGIN_NAME)
    if plugin is not None:
        config.pluginmanager.unregister(plugin, PLUGIN_NAME)


# =============================================================================
# Report Annotation (runs wherever the test runs)
# =============================================================================

def describe(item) -> Optional[str]:
    """First line of the test function's docstring, if any."""
    obj = getattr(item, "obj", None)
    doc = getattr(obj, "__doc__", None)
    if not doc or not doc.strip():
        return None
    return doc.strip().splitlines()[0].strip()


def exception_message(excinfo) -> str:
    message = str(excinfo.value).strip()
    return message or excinfo.typename


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    if not item.config.getoption("execution_report"):
        return
    report = outcome.get_result()
    report.description = describe(item)
    if report.failed and call.excinfo is not None:
        report.error_message = exception_message(call.excinfo)


def pytest_exception_interact(node, call, report):
    """Attach failure details to the Allure result."""
    if not node.config.getoption("execution_report"):
        return
    if report.failed and call.excinfo is not None:
        allure.attach(
            exception_message(call.excinfo),
            name="Error Details",
            attachment_type=allure.attachment_type.TEXT,
        )


# =============================================================================
# Outcome Folding
# =============================================================================

def skip_reason(report) -> Optional[str]:
    """Extract the skip (or xfail) reason from a skipped report."""
    wasxfail = getattr(report, "wasxfail", None)
    if wasxfail is not None:
        return f"xfail: {wasxfail}" if wasxfail else "xfail"
    longrepr = report.longrepr
    if isinstance(longrepr, tuple) and len(longrepr) == 3:
        reason = str(longrepr[2])
        if reason.startswith("Skipped: "):
            reason = reason[len("Skipped: "):]
        return reason or None
    return None


def failure_message(report) -> str:
    message = getattr(report, "error_message", None)
    if message is not None:
        return message
    lines = [line for line in report.longreprtext.splitlines() if line.strip()]
    return lines[-1].strip() if lines else ""


@dataclass
class PendingOutcome:
    """Outcome of one test while its phases are still being reported."""

    description: Optional[str] = None
    status: Optional[TestStatus] = None
    duration_ms: int = 0
    message: Optional[str] = None

    def update(self, report) -> None:
        description = getattr(report, "description", None)
        if description:
            self.description = description

        if report.when == "call":
            self.duration_ms = max(0, int(round(report.duration * 1000)))

        if report.failed:
            if self.status is not TestStatus.FAILED:
                self.status = TestStatus.FAILED
                self.message = failure_message(report)
        elif report.skipped and self.status is None:
            self.status = TestStatus.SKIPPED
            self.message = skip_reason(report)


# =============================================================================
# Plugin
# =============================================================================

class ReportingPlugin:
    """Session-level pytest plugin owning one LifecycleListener."""

    def __init__(self, config, listener: Optional[LifecycleListener] = None):
        self.config = config
        self.listener = listener or LifecycleListener(
            reports_dir=config.getoption("reports_dir")
        )
        self.suite_name = (
            config.getoption("report_suite_name")
            or get_config("reporting.suite_name")
            or config.rootpath.name
        )
        self.report: Optional[SuiteReport] = None
        self._pending: Dict[str, PendingOutcome] = {}
        self._descriptions: Dict[str, Optional[str]] = {}

    def pytest_sessionstart(self, session):
        self.listener.on_suite_start(self.suite_name)

    def pytest_collection_modifyitems(self, items):
        for item in items:
            self._descriptions[item.nodeid] = describe(item)

    def pytest_runtest_logstart(self, nodeid, location):
        self.listener.on_test_start(nodeid, self._descriptions.get(nodeid))

    def pytest_runtest_logreport(self, report):
        pending = self._pending.setdefault(report.nodeid, PendingOutcome())
        pending.update(report)
        if report.when == "teardown":
            self._emit(report.nodeid, self._pending.pop(report.nodeid))

    def pytest_sessionfinish(self, session, exitstatus):
        # Tests whose teardown report never arrived (e.g. a crashed xdist worker)
        for nodeid in list(self._pending):
            logger.warning(f"Teardown report missing for {nodeid}, recording last known outcome")
            self._emit(nodeid, self._pending.pop(nodeid))
        self.report = self.listener.on_suite_finish(self.suite_name)

    def pytest_terminal_summary(self, terminalreporter):
        if self.report is None:
            return
        if self.report.report_path is not None:
            terminalreporter.write_sep("-", f"execution report: {self.report.report_path}")
        else:
            terminalreporter.write_sep("-", "execution report: HTML report was not written", red=True)

    def _emit(self, nodeid: str, pending: PendingOutcome) -> None:
        description = pending.description or self._descriptions.get(nodeid)
        if pending.status is TestStatus.FAILED:
            self.listener.on_test_failure(nodeid, description, pending.duration_ms, pending.message)
        elif pending.status is TestStatus.SKIPPED:
            self.listener.on_test_skipped(nodeid, description, pending.message)
        else:
            self.listener.on_test_success(nodeid, description, pending.duration_ms)


__all__ = [
    "ReportingPlugin",
    "PendingOutcome",
    "PLUGIN_NAME",
    "describe",
    "skip_reason",
]
