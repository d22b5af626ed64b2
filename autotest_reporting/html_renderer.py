"""
================================================================================
HTML Report Renderer
================================================================================

Renders a finished suite run as one self-contained HTML document: inline
CSS, no scripts, no external resources.

Sections (in order):
    - <head> with the report title
    - Header with suite name and generation time
    - Statistics cards (total, passed, failed, skipped, pass rate)
    - Results table, one row per outcome
    - Footer with generation time

Every user-controlled value (suite name, test name, description, error
message) is passed through html.escape before it is inserted.

================================================================================
"""

from __future__ import annotations

import html
from datetime import datetime
from typing import List, Optional

from autotest_reporting.formatting import format_timestamp, or_placeholder
from autotest_reporting.models import OutcomeRecord, SuiteSnapshot, TestStatus
from autotest_reporting.suite import SuiteRun

FRAMEWORK_NAME = "API Automation Testing Framework"

STYLES = """
* {margin: 0; padding: 0; box-sizing: border-box;}
body {font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif; background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); color: #333; padding: 20px; min-height: 100vh;}
.container {max-width: 1200px; margin: 0 auto; background: white; border-radius: 10px; box-shadow: 0 10px 40px rgba(0,0,0,0.2); overflow: hidden;}
.header {background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); color: white; padding: 40px; text-align: center;}
.header h1 {font-size: 2.5em; margin-bottom: 10px;}
.header p {font-size: 1.1em; opacity: 0.9;}
.header .generated {margin-top: 10px; font-size: 0.9em;}
.content {padding: 40px;}
.section-title {font-size: 1.5em; margin: 30px 0 20px 0; color: #333; border-bottom: 2px solid #667eea; padding-bottom: 10px;}
.statistics {display: grid; grid-template-columns: repeat(auto-fit, minmax(200px, 1fr)); gap: 20px; margin-bottom: 40px;}
.stat-card {background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); color: white; padding: 25px; border-radius: 8px; text-align: center; box-shadow: 0 4px 15px rgba(0,0,0,0.1);}
.stat-card.passed {background: linear-gradient(135deg, #11998e 0%, #38ef7d 100%);}
.stat-card.failed {background: linear-gradient(135deg, #ee0979 0%, #ff6a00 100%);}
.stat-card.skipped {background: linear-gradient(135deg, #ffa400 0%, #ffb74d 100%);}
.stat-value {font-size: 2.5em; font-weight: bold; margin: 10px 0;}
.stat-label {font-size: 0.9em; opacity: 0.9;}
.results-table {width: 100%; border-collapse: collapse; margin: 20px 0;}
.results-table thead {background: #f5f5f5; border-bottom: 2px solid #667eea;}
.results-table th {padding: 15px; text-align: left; font-weight: 600; color: #333;}
.results-table td {padding: 15px; border-bottom: 1px solid #eee; vertical-align: top;}
.results-table tr:hover {background: #f9f9f9;}
.status-badge {display: inline-block; padding: 5px 12px; border-radius: 20px; font-weight: 600; font-size: 0.85em;}
.status-badge.passed {background: #d4edda; color: #155724;}
.status-badge.failed {background: #f8d7da; color: #721c24;}
.status-badge.skipped {background: #fff3cd; color: #856404;}
.error-message {margin-top: 8px; font-family: monospace; font-size: 0.85em; color: #721c24; white-space: pre-wrap; word-break: break-word;}
.empty {padding: 20px; text-align: center; color: #666;}
.footer {background: #f5f5f5; padding: 20px; text-align: center; color: #666; font-size: 0.9em; border-top: 1px solid #ddd;}
""".strip()


def escape(value: Optional[str]) -> str:
    """HTML-escape a value, including quotes; None becomes an empty string."""
    if value is None:
        return ""
    return html.escape(str(value), quote=True)


class HtmlRenderer:
    """Builds the HTML report document."""

    def render(self, suite_run: SuiteRun, snapshot: SuiteSnapshot) -> str:
        """
        Render the complete HTML report.

        The generation timestamp is the suite's end time (its start time
        while it is still running), so rendering the same run twice gives
        the same document.

        Args:
            suite_run: Suite run supplying name and timing
            snapshot: Outcome snapshot to render

        Returns:
            HTML document as a string
        """
        generated = format_timestamp(self._generated_at(suite_run))
        suite_name = escape(or_placeholder(suite_run.name, "Test Suite"))

        parts: List[str] = [
            "<!DOCTYPE html>",
            '<html lang="en">',
            "<head>",
            '    <meta charset="UTF-8">',
            '    <meta name="viewport" content="width=device-width, initial-scale=1.0">',
            f"    <title>{suite_name} - Test Report</title>",
            f"<style>\n{STYLES}\n</style>",
            "</head>",
            "<body>",
            '<div class="container">',
            self._header(suite_name, generated),
            '    <div class="content">',
            self._statistics(snapshot),
            self._results(snapshot),
            "    </div>",
            self._footer(generated),
            "</div>",
            "</body>",
            "</html>",
        ]
        return "\n".join(parts)

    @staticmethod
    def _generated_at(suite_run: SuiteRun) -> datetime:
        return suite_run.end_time or suite_run.start_time

    def _header(self, suite_name: str, generated: str) -> str:
        return (
            '    <div class="header">'
            "<h1>📊 Test Execution Report</h1>"
            f"<p>{suite_name}</p>"
            f'<p class="generated">Generated: {generated}</p>'
            "</div>"
        )

    def _statistics(self, snapshot: SuiteSnapshot) -> str:
        cards = [
            ("", "Total Tests", str(snapshot.total)),
            ("passed", f"Passed {TestStatus.PASSED.symbol}", str(snapshot.passed)),
            ("failed", f"Failed {TestStatus.FAILED.symbol}", str(snapshot.failed)),
            ("skipped", f"Skipped {TestStatus.SKIPPED.symbol}", str(snapshot.skipped)),
            ("", "Pass Rate", f"{snapshot.pass_rate:.1f}%"),
        ]
        rendered = "".join(
            f'<div class="{("stat-card " + css).strip()}">'
            f'<div class="stat-label">{label}</div>'
            f'<div class="stat-value">{value}</div>'
            "</div>"
            for css, label, value in cards
        )
        return (
            '        <div class="section-title">📈 Test Statistics</div>'
            f'<div class="statistics">{rendered}</div>'
        )

    def _results(self, snapshot: SuiteSnapshot) -> str:
        rows = "\n".join(self._row(outcome) for outcome in snapshot.outcomes)
        if not rows:
            rows = '<tr><td colspan="4" class="empty">No tests were executed</td></tr>'
        return (
            '        <div class="section-title">📋 Test Results</div>'
            '<table class="results-table"><thead><tr>'
            '<th style="width: 25%;">Test Name</th>'
            '<th style="width: 35%;">Description</th>'
            '<th style="width: 25%;">Status</th>'
            '<th style="width: 15%;">Duration</th>'
            "</tr></thead><tbody>\n"
            f"{rows}\n"
            "</tbody></table>"
        )

    def _row(self, outcome: OutcomeRecord) -> str:
        status = outcome.status
        badge = f'<span class="status-badge {status.css_class}">{status.value}</span>'
        if status is not TestStatus.PASSED and outcome.error_message:
            badge += f'<div class="error-message">{escape(outcome.error_message)}</div>'
        return (
            f"<tr><td><strong>{escape(outcome.name)}</strong></td>"
            f"<td>{escape(or_placeholder(outcome.description, 'N/A'))}</td>"
            f"<td>{badge}</td>"
            f"<td>{outcome.duration_ms}ms</td></tr>"
        )

    def _footer(self, generated: str) -> str:
        return (
            '    <div class="footer">'
            f"<p>{FRAMEWORK_NAME} | Report generated on {generated}</p>"
            "</div>"
        )


__all__ = ["HtmlRenderer", "escape", "FRAMEWORK_NAME"]
