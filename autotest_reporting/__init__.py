"""
================================================================================
Autotest Reporting
================================================================================

Test execution reporting engine for the API automation suites.

Subscribes to the test runner's lifecycle events, aggregates outcomes from
concurrently running tests, and renders a fixed-width console summary and
a self-contained HTML report.

Modules:
    - models: Outcome records, statuses and snapshots
    - aggregator: Thread-safe outcome store
    - suite: Suite run lifecycle object
    - listener: Lifecycle callbacks driving aggregation and rendering
    - console_renderer / html_renderer: Report renderers
    - report_writer: HTML report persistence
    - pytest_plugin: pytest integration (``-p autotest_reporting.pytest_plugin``)
    - common: Configuration and logging setup

Example:
    from autotest_reporting import LifecycleListener

    listener = LifecycleListener(reports_dir="reports/execution")
    listener.on_suite_start("API Regression")
    listener.on_test_success("test_get_users", "List users", 120)
    listener.on_test_failure("test_delete_user", None, 80, "expected 204, got 500")
    report = listener.on_suite_finish("API Regression")
    report.snapshot.pass_rate   # 50.0
    report.report_path          # reports/execution/test-report-....html

================================================================================
"""

from autotest_reporting.aggregator import ResultAggregator
from autotest_reporting.console_renderer import ConsoleRenderer
from autotest_reporting.errors import (
    ConfigurationError,
    LifecycleError,
    ReportingError,
    ReportWriteError,
)
from autotest_reporting.html_renderer import HtmlRenderer
from autotest_reporting.listener import LifecycleListener, ListenerState, SuiteReport
from autotest_reporting.models import (
    SKIP_PLACEHOLDER,
    DurationStats,
    OutcomeRecord,
    SuiteSnapshot,
    TestStatus,
)
from autotest_reporting.report_writer import ReportWriter, WriteResult
from autotest_reporting.suite import SuiteRun

__version__ = "1.0.0"

__all__ = [
    "ResultAggregator",
    "ConsoleRenderer",
    "HtmlRenderer",
    "LifecycleListener",
    "ListenerState",
    "SuiteReport",
    "SuiteRun",
    "OutcomeRecord",
    "SuiteSnapshot",
    "DurationStats",
    "TestStatus",
    "SKIP_PLACEHOLDER",
    "ReportWriter",
    "WriteResult",
    "ReportingError",
    "LifecycleError",
    "ReportWriteError",
    "ConfigurationError",
]
