"""
================================================================================
Result Aggregator
================================================================================

Thread-safe, append-only store of outcome records for one suite run.

Test runners may report outcomes from several worker threads at once. All
writes and reads go through a single lock, so no record is lost, duplicated
or observed half-built, and a snapshot is always a consistent prefix of the
completion order.

Usage:
    aggregator = ResultAggregator()
    aggregator.append(OutcomeRecord.passed("test_login", None, 120))
    snapshot = aggregator.snapshot()
    snapshot.total, snapshot.pass_rate

================================================================================
"""

from __future__ import annotations

import threading
from typing import List

from autotest_reporting.models import DurationStats, OutcomeRecord, SuiteSnapshot


class ResultAggregator:
    """Append-only outcome store with derived statistics."""

    def __init__(self) -> None:
        self._records: List[OutcomeRecord] = []
        self._lock = threading.Lock()

    def append(self, record: OutcomeRecord) -> None:
        """
        Append one outcome record.

        Args:
            record: Completed outcome; it is never modified afterwards

        Raises:
            TypeError: If record is not an OutcomeRecord
        """
        if not isinstance(record, OutcomeRecord):
            raise TypeError(f"Expected OutcomeRecord, got {type(record).__name__}")
        with self._lock:
            self._records.append(record)

    def snapshot(self) -> SuiteSnapshot:
        """
        Return the records appended so far, in completion order.
        """
        with self._lock:
            return SuiteSnapshot(tuple(self._records))

    def duration_stats(self) -> DurationStats:
        """Min/max/average duration over all records (zeros when empty)."""
        return self.snapshot().duration_stats()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


__all__ = ["ResultAggregator"]
