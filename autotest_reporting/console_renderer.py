"""
================================================================================
Console Report Renderer
================================================================================

Renders a finished suite run as fixed-width text lines for the log.

Layout (in order):
    1. Summary banner
    2. SUITE INFORMATION   - name, start/end time, total duration
    3. TEST STATISTICS     - counts and pass rate
    4. DETAILED TEST RESULTS table (when any test was recorded)
    5. FAILED TESTS DETAILS (when any test failed)
    6. Overall status banner

Field values are padded or hard-truncated to their column width, so the
same snapshot always produces the same lines.

================================================================================
"""

from __future__ import annotations

from typing import List

from autotest_reporting.formatting import (
    center,
    format_duration,
    format_timestamp,
    or_placeholder,
    pad_right,
)
from autotest_reporting.models import OutcomeRecord, SuiteSnapshot, TestStatus
from autotest_reporting.suite import SuiteRun

# Column widths
BOX_WIDTH = 79
BANNER_WIDTH = 80
LABEL_WIDTH = 16
VALUE_WIDTH = 57
NAME_WIDTH = 30
STATUS_WIDTH = 9
DURATION_WIDTH = 10
ERROR_WIDTH = 70

NO_ERROR_MESSAGE = "No error message"

ALL_PASSED = "✓ ALL TESTS PASSED"
SOME_FAILED = "✗ SOME TESTS FAILED"


def status_symbol(status) -> str:
    """Return the status symbol, ``?`` for anything unrecognised."""
    try:
        return TestStatus(status).symbol
    except ValueError:
        return "?"


def _single_line(text: str) -> str:
    return " ".join(text.split())


def _box_top(title: str, width: int = BOX_WIDTH) -> str:
    head = f"┌─ {title} "
    return head + "─" * (width - len(head) - 1) + "┐"


def _box_bottom(width: int = BOX_WIDTH) -> str:
    return "└" + "─" * (width - 2) + "┘"


def _field(label: str, value: str) -> str:
    return f"│ {pad_right(label, LABEL_WIDTH)} : {pad_right(value, VALUE_WIDTH)}│"


class ConsoleRenderer:
    """Builds the text summary of a suite run."""

    def render(self, suite_run: SuiteRun, snapshot: SuiteSnapshot) -> List[str]:
        """
        Render the full console report.

        Args:
            suite_run: Finished suite run (name and timing)
            snapshot: Final outcome snapshot of that run

        Returns:
            Report lines, without trailing newlines
        """
        lines: List[str] = []
        lines.extend(self._banner())
        lines.extend(self._suite_information(suite_run))
        lines.extend(self._statistics(snapshot))
        if snapshot.outcomes:
            lines.extend(self._results_table(snapshot))
        if snapshot.failed > 0:
            lines.extend(self._failure_details(snapshot))
        lines.extend(self._overall_status(snapshot))
        return lines

    def _banner(self) -> List[str]:
        inner = BANNER_WIDTH - 2
        return [
            "",
            "█" * BANNER_WIDTH,
            "█" + " " * inner + "█",
            "█" + center("TEST EXECUTION SUMMARY REPORT", inner) + "█",
            "█" + " " * inner + "█",
            "█" * BANNER_WIDTH,
        ]

    def _suite_information(self, suite_run: SuiteRun) -> List[str]:
        duration_ms = suite_run.duration_ms
        return [
            "",
            _box_top("SUITE INFORMATION"),
            _field("Suite Name", _single_line(or_placeholder(suite_run.name, "N/A"))),
            _field("Start Time", format_timestamp(suite_run.start_time)),
            _field("End Time", format_timestamp(suite_run.end_time)),
            _field(
                "Total Duration",
                format_duration(duration_ms) if duration_ms is not None else "N/A",
            ),
            _box_bottom(),
        ]

    def _statistics(self, snapshot: SuiteSnapshot) -> List[str]:
        return [
            "",
            _box_top("TEST STATISTICS"),
            _field("Total Tests", str(snapshot.total)),
            _field("Passed", f"{snapshot.passed} {TestStatus.PASSED.symbol}"),
            _field("Failed", f"{snapshot.failed} {TestStatus.FAILED.symbol}"),
            _field("Skipped", f"{snapshot.skipped} {TestStatus.SKIPPED.symbol}"),
            _field("Pass Rate", f"{snapshot.pass_rate:.2f}%"),
            _box_bottom(),
        ]

    def _results_table(self, snapshot: SuiteSnapshot) -> List[str]:
        # "│ " + name + " │ " + status + " │ " + duration + " │"
        width = NAME_WIDTH + STATUS_WIDTH + DURATION_WIDTH + 10
        lines = [
            "",
            _box_top("DETAILED TEST RESULTS", width),
            "│ " + pad_right("Test Name", NAME_WIDTH)
            + " │ " + pad_right("Status", STATUS_WIDTH)
            + " │ " + pad_right("Duration", DURATION_WIDTH) + " │",
            "├─" + "─" * NAME_WIDTH + "─┼─" + "─" * STATUS_WIDTH
            + "─┼─" + "─" * DURATION_WIDTH + "─┤",
        ]
        for outcome in snapshot.outcomes:
            lines.append(self._result_row(outcome))
        lines.append(
            "└─" + "─" * NAME_WIDTH + "─┴─" + "─" * STATUS_WIDTH
            + "─┴─" + "─" * DURATION_WIDTH + "─┘"
        )
        return lines

    def _result_row(self, outcome: OutcomeRecord) -> str:
        status = f"{status_symbol(outcome.status)} {outcome.status.value}"
        return (
            "│ " + pad_right(_single_line(outcome.name), NAME_WIDTH)
            + " │ " + pad_right(status, STATUS_WIDTH)
            + " │ " + pad_right(f"{outcome.duration_ms}ms", DURATION_WIDTH) + " │"
        )

    def _failure_details(self, snapshot: SuiteSnapshot) -> List[str]:
        # Test/Error rows are a fixed 9-character label plus a 70-character value
        width = 9 + ERROR_WIDTH + 1
        lines = ["", _box_top("FAILED TESTS DETAILS", width)]
        for outcome in snapshot.failed_outcomes:
            message = _single_line(or_placeholder(outcome.error_message, NO_ERROR_MESSAGE))
            lines.append("│ Test:  " + pad_right(_single_line(outcome.name), ERROR_WIDTH) + "│")
            lines.append("│ Error: " + pad_right(message, ERROR_WIDTH) + "│")
        lines.append(_box_bottom(width))
        return lines

    def _overall_status(self, snapshot: SuiteSnapshot) -> List[str]:
        status = ALL_PASSED if snapshot.failed == 0 else SOME_FAILED
        inner = BOX_WIDTH - 2
        return [
            "",
            "┌" + "─" * inner + "┐",
            "│" + center(status, inner) + "│",
            "└" + "─" * inner + "┘",
            "",
        ]


__all__ = [
    "ConsoleRenderer",
    "status_symbol",
    "ALL_PASSED",
    "SOME_FAILED",
    "NO_ERROR_MESSAGE",
]
