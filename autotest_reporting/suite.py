"""
Suite run lifecycle object.

A SuiteRun is created when a suite starts, receives outcomes through its
own aggregator while running, and is frozen once when the suite finishes.
It is never reset or reused.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Tuple

from loguru import logger

from autotest_reporting.aggregator import ResultAggregator
from autotest_reporting.errors import LifecycleError
from autotest_reporting.models import OutcomeRecord, SuiteSnapshot


class SuiteRun:
    """One execution of a named collection of tests."""

    def __init__(self, name: str, start_time: datetime):
        self.name = name
        self.start_time = start_time
        self.end_time: Optional[datetime] = None
        self.aggregator = ResultAggregator()

    @property
    def is_finished(self) -> bool:
        return self.end_time is not None

    def record(self, outcome: OutcomeRecord) -> None:
        if self.is_finished:
            raise LifecycleError(f"Suite run '{self.name}' is already finished")
        self.aggregator.append(outcome)

    def finish(self, end_time: datetime) -> SuiteSnapshot:
        """
        Freeze the run and return its final snapshot.

        An end_time earlier than start_time (wall clock stepped back) is
        clamped to start_time.

        Raises:
            LifecycleError: If the run was already finished
        """
        if self.is_finished:
            raise LifecycleError(f"Suite run '{self.name}' is already finished")
        if end_time < self.start_time:
            logger.warning(
                f"End time {end_time} precedes start time {self.start_time}; "
                f"clamping suite '{self.name}' duration to 0"
            )
            end_time = self.start_time
        self.end_time = end_time
        return self.aggregator.snapshot()

    @property
    def duration_ms(self) -> Optional[int]:
        """Wall-clock duration in milliseconds, None while running."""
        if self.end_time is None:
            return None
        return int((self.end_time - self.start_time).total_seconds() * 1000)

    @property
    def outcomes(self) -> Tuple[OutcomeRecord, ...]:
        return self.aggregator.snapshot().outcomes

    def __repr__(self) -> str:
        return (
            f"SuiteRun(name={self.name!r}, outcomes={len(self.aggregator)}, "
            f"finished={self.is_finished})"
        )


__all__ = ["SuiteRun"]
