from datetime import datetime

import pytest

from autotest_reporting.errors import LifecycleError
from autotest_reporting.models import OutcomeRecord
from autotest_reporting.suite import SuiteRun

START = datetime(2024, 3, 15, 10, 30, 0)


def test_running_suite_has_no_duration():
    run = SuiteRun("Regression", START)

    assert not run.is_finished
    assert run.duration_ms is None
    assert run.outcomes == ()


def test_finish_returns_snapshot_and_freezes():
    run = SuiteRun("Regression", START)
    run.record(OutcomeRecord.passed("test_a", None, 5))

    snapshot = run.finish(datetime(2024, 3, 15, 10, 30, 1, 250000))

    assert run.is_finished
    assert run.duration_ms == 1250
    assert snapshot.total == 1
    with pytest.raises(LifecycleError):
        run.record(OutcomeRecord.passed("test_b", None, 5))
    assert len(run.outcomes) == 1


def test_second_finish_is_rejected():
    run = SuiteRun("Regression", START)
    run.finish(START)

    with pytest.raises(LifecycleError):
        run.finish(START)


def test_end_before_start_is_clamped():
    run = SuiteRun("Regression", START)
    run.record(OutcomeRecord.passed("test_a", None, 5))

    snapshot = run.finish(datetime(2024, 3, 15, 10, 29, 59))

    assert run.is_finished
    assert run.end_time == START
    assert run.duration_ms == 0
    assert snapshot.total == 1
