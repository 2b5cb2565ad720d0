"""Tests for the polling loop."""

import time

import pytest

from selenium_waiter.core.errors import WaitTimeoutError
from selenium_waiter.waits.polling import Condition, ErrorPolicy, Outcome, wait_until


def test_wait_until_immediate():
    result = wait_until(Condition(lambda: True), timeout_s=1, poll_ms=10)
    assert result.outcome is Outcome.SATISFIED
    assert result.attempts == 1


def test_wait_until_zero_timeout_still_evaluates_once():
    result = wait_until(Condition(lambda: True), timeout_s=0, poll_ms=10)
    assert result.attempts == 1


def test_wait_until_zero_timeout_fails_without_sleeping():
    start = time.monotonic()
    with pytest.raises(WaitTimeoutError):
        wait_until(Condition(lambda: False), timeout_s=0, poll_ms=500)
    assert time.monotonic() - start < 0.2


def test_wait_until_eventual():
    counter = {"n": 0}

    def probe():
        counter["n"] += 1
        return counter["n"] >= 3

    result = wait_until(Condition(probe), timeout_s=5, poll_ms=10)
    assert result.attempts == 3
    assert counter["n"] == 3


def test_wait_until_returns_soon_after_condition_becomes_true():
    start = time.monotonic()
    result = wait_until(
        Condition(lambda: time.monotonic() - start >= 0.2), timeout_s=5, poll_ms=50
    )
    assert 0.2 <= result.elapsed_s < 0.2 + 0.05 + 0.15


def test_wait_until_times_out_at_deadline_not_before():
    start = time.monotonic()
    with pytest.raises(WaitTimeoutError):
        wait_until(Condition(lambda: False), timeout_s=1, poll_ms=30)
    elapsed = time.monotonic() - start
    assert 1.0 <= elapsed < 1.5


def test_timeout_message_names_operation_target_and_timeout():
    with pytest.raises(WaitTimeoutError) as info:
        wait_until(
            Condition(lambda: False),
            timeout_s=0,
            operation="Click",
            target="css selector='#save'",
        )
    err = info.value
    assert str(err) == "Click could not complete on css selector='#save' within 0 seconds"
    assert err.operation == "Click"
    assert err.target == "css selector='#save'"
    assert err.timeout == 0
    assert err.attempts == 1


def test_timeout_chains_last_probe_error():
    def probe():
        raise RuntimeError("stale")

    with pytest.raises(WaitTimeoutError) as info:
        wait_until(Condition(probe), timeout_s=0)
    assert isinstance(info.value.__cause__, RuntimeError)


def test_timeout_after_clean_final_attempt_has_no_cause():
    calls = {"n": 0}

    def probe():
        calls["n"] += 1
        if calls["n"] == 1:
            raise RuntimeError("stale")
        return False

    with pytest.raises(WaitTimeoutError) as info:
        wait_until(Condition(probe), timeout_s=0.1, poll_ms=10)
    assert info.value.attempts >= 2
    assert info.value.__cause__ is None


def test_evaluate_clears_error_from_previous_attempt():
    answers = iter([RuntimeError("stale"), True])

    def probe():
        answer = next(answers)
        if isinstance(answer, Exception):
            raise answer
        return answer

    cond = Condition(probe)
    assert cond.evaluate() is Outcome.NOT_YET
    assert isinstance(cond.last_error, RuntimeError)
    assert cond.evaluate() is Outcome.SATISFIED
    assert cond.last_error is None


def test_not_ready_policy_reads_exception_as_not_yet():
    def probe():
        raise ValueError("boom")

    cond = Condition(probe, ErrorPolicy.NOT_READY)
    assert cond.evaluate() is Outcome.NOT_YET
    assert isinstance(cond.last_error, ValueError)


def test_ready_policy_reads_exception_as_absent():
    def probe():
        raise ValueError("no such feature")

    cond = Condition(probe, ErrorPolicy.READY)
    assert cond.evaluate() is Outcome.ABSENT
    assert Outcome.ABSENT.done


def test_ready_policy_false_result_is_still_not_yet():
    cond = Condition(lambda: False, ErrorPolicy.READY)
    assert cond.evaluate() is Outcome.NOT_YET


def test_absent_outcome_ends_the_wait():
    def probe():
        raise LookupError("missing")

    result = wait_until(Condition(probe, ErrorPolicy.READY), timeout_s=0)
    assert result.outcome is Outcome.ABSENT
