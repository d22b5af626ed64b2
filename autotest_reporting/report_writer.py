"""
Persists rendered HTML reports.

Reports are written to ``<base_dir>/test-report-<YYYY-MM-DD-HH-MM-SS>.html``.
The timestamp has second precision; two reports written within the same
second share a file name and the later one overwrites the earlier.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from loguru import logger

from autotest_reporting.common import ensure_directory
from autotest_reporting.errors import ReportWriteError
from autotest_reporting.formatting import FILE_TIMESTAMP_FORMAT

REPORT_FILE_PREFIX = "test-report-"


@dataclass(frozen=True)
class WriteResult:
    """Outcome of a report write: the file path, or the error that prevented it."""

    path: Optional[Path] = None
    error: Optional[ReportWriteError] = None

    @property
    def ok(self) -> bool:
        return self.path is not None and self.error is None


def report_file_name(timestamp: datetime) -> str:
    return f"{REPORT_FILE_PREFIX}{timestamp.strftime(FILE_TIMESTAMP_FORMAT)}.html"


class ReportWriter:
    """Writes HTML reports under a base directory, creating it on demand."""

    def write(
        self,
        html_content: str,
        base_dir: Union[str, Path],
        timestamp: Optional[datetime] = None,
    ) -> WriteResult:
        """
        Write an HTML report.

        I/O and encoding failures are logged and returned in the result
        instead of raised, so the caller decides whether a missing file matters.

        Args:
            html_content: Complete HTML document
            base_dir: Reports directory (created with parents if absent)
            timestamp: Time embedded in the file name (defaults to now)

        Returns:
            WriteResult with the written path, or with the error
        """
        timestamp = timestamp or datetime.now()
        path = Path(base_dir) / report_file_name(timestamp)

        try:
            ensure_directory(base_dir)
            path.write_text(html_content, encoding="utf-8")
        except (OSError, UnicodeError) as e:
            error = ReportWriteError(f"Failed to write HTML report {path}: {e}", path=path)
            error.__cause__ = e
            logger.error(str(error))
            return WriteResult(error=error)

        logger.info(f"📊 HTML report generated: {path}")
        return WriteResult(path=path)


__all__ = ["ReportWriter", "WriteResult", "report_file_name", "REPORT_FILE_PREFIX"]
