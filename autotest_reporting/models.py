"""
================================================================================
Execution Report Data Models
================================================================================

Immutable value types shared by the aggregator, the listener and the
renderers.

Models:
    - TestStatus: closed set of test outcomes
    - OutcomeRecord: result of one completed (or skipped) test
    - SuiteSnapshot: consistent view of recorded outcomes plus derived counts
    - DurationStats: min/max/average duration over a snapshot

================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

SKIP_PLACEHOLDER = "No reason provided"


class TestStatus(str, Enum):
    """Outcome of a single test."""

    __test__ = False

    PASSED = "PASSED"
    FAILED = "FAILED"
    SKIPPED = "SKIPPED"

    @property
    def symbol(self) -> str:
        return _STATUS_SYMBOLS[self]

    @property
    def css_class(self) -> str:
        return self.value.lower()


_STATUS_SYMBOLS = {
    TestStatus.PASSED: "✓",
    TestStatus.FAILED: "✗",
    TestStatus.SKIPPED: "⊗",
}


@dataclass(frozen=True)
class OutcomeRecord:
    """
    Result of one test method.

    A failed record always carries a message (possibly empty). A skipped
    record carries its cause, or SKIP_PLACEHOLDER when none was given.
    Passed records carry no message.
    """

    name: str
    description: Optional[str]
    status: TestStatus
    duration_ms: int = 0
    error_message: Optional[str] = None

    def __post_init__(self):
        if not self.name:
            raise ValueError("Outcome record name must be non-empty")
        if not isinstance(self.status, TestStatus):
            object.__setattr__(self, "status", TestStatus(self.status))
        if self.duration_ms < 0:
            raise ValueError(f"Negative duration for {self.name}: {self.duration_ms}ms")
        if self.status is TestStatus.FAILED and self.error_message is None:
            raise ValueError(f"Failed record {self.name} requires an error message")

    @classmethod
    def passed(cls, name: str, description: Optional[str], duration_ms: int) -> "OutcomeRecord":
        return cls(name, description, TestStatus.PASSED, int(duration_ms))

    @classmethod
    def failed(
        cls,
        name: str,
        description: Optional[str],
        duration_ms: int,
        error_message: Optional[str],
    ) -> "OutcomeRecord":
        return cls(
            name,
            description,
            TestStatus.FAILED,
            int(duration_ms),
            error_message if error_message is not None else "",
        )

    @classmethod
    def skipped(
        cls,
        name: str,
        description: Optional[str],
        cause: Optional[str] = None,
    ) -> "OutcomeRecord":
        message = cause if cause is not None else SKIP_PLACEHOLDER
        return cls(name, description, TestStatus.SKIPPED, 0, message)


@dataclass(frozen=True)
class DurationStats:
    """Duration statistics in milliseconds."""

    minimum: int = 0
    maximum: int = 0
    average: float = 0.0

    @classmethod
    def from_outcomes(cls, outcomes: Tuple[OutcomeRecord, ...]) -> "DurationStats":
        if not outcomes:
            return cls()
        durations = [o.duration_ms for o in outcomes]
        return cls(
            minimum=min(durations),
            maximum=max(durations),
            average=sum(durations) / len(durations),
        )


@dataclass(frozen=True)
class SuiteSnapshot:
    """
    Consistent view of the outcomes recorded so far.

    Counts are computed from ``outcomes`` on access and never stored, so
    they cannot drift from the record list.
    """

    outcomes: Tuple[OutcomeRecord, ...] = field(default_factory=tuple)

    def _count(self, status: TestStatus) -> int:
        return sum(1 for o in self.outcomes if o.status is status)

    @property
    def passed(self) -> int:
        return self._count(TestStatus.PASSED)

    @property
    def failed(self) -> int:
        return self._count(TestStatus.FAILED)

    @property
    def skipped(self) -> int:
        return self._count(TestStatus.SKIPPED)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def pass_rate(self) -> float:
        """Pass rate percentage, 0.0 for an empty run."""
        if self.total == 0:
            return 0.0
        return self.passed * 100.0 / self.total

    @property
    def failed_outcomes(self) -> Tuple[OutcomeRecord, ...]:
        return tuple(o for o in self.outcomes if o.status is TestStatus.FAILED)

    def duration_stats(self) -> DurationStats:
        return DurationStats.from_outcomes(self.outcomes)

    def to_dict(self) -> dict:
        """Summary counts, in the shape used for log/JSON output."""
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "skipped": self.skipped,
            "pass_rate": f"{self.pass_rate:.2f}%",
        }


__all__ = [
    "SKIP_PLACEHOLDER",
    "TestStatus",
    "OutcomeRecord",
    "DurationStats",
    "SuiteSnapshot",
]
