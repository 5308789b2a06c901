"""
Tests for reliability — bounded polling.
"""

import pytest

from dockside_installer.core.reliability import PollResult, poll_until


class _Clock:
    def __init__(self):
        self.sleeps: list[float] = []

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)


class TestPollUntil:
    def test_immediate_success_never_sleeps(self):
        clock = _Clock()
        result = poll_until(lambda: True, max_attempts=5, delay=1.0, sleep=clock.sleep)
        assert result.ok
        assert result.attempts == 1
        assert clock.sleeps == []

    def test_success_on_third_attempt(self):
        answers = iter([False, False, True])
        clock = _Clock()
        result = poll_until(lambda: next(answers), max_attempts=5, delay=2.0, sleep=clock.sleep)
        assert result.ok
        assert result.attempts == 3
        assert result.waited == 4.0

    def test_exhaustion_is_bounded(self):
        calls = []
        clock = _Clock()

        def never() -> bool:
            calls.append(1)
            return False

        result = poll_until(never, max_attempts=15, delay=1.0, sleep=clock.sleep)
        assert not result
        assert len(calls) == 15
        assert len(clock.sleeps) == 14
        assert result.waited == 14.0

    def test_predicate_errors_count_as_failures(self):
        def boom() -> bool:
            raise RuntimeError("socket not there yet")

        result = poll_until(boom, max_attempts=3, delay=0, sleep=_Clock().sleep)
        assert result.ok is False
        assert result.attempts == 3
        assert "socket" in result.last_error

    def test_recovers_after_errors(self):
        state = {"n": 0}

        def flaky() -> bool:
            state["n"] += 1
            if state["n"] < 2:
                raise OSError("refused")
            return True

        assert poll_until(flaky, max_attempts=3, delay=0, sleep=_Clock().sleep).ok

    def test_single_attempt(self):
        clock = _Clock()
        result = poll_until(lambda: False, max_attempts=1, delay=5.0, sleep=clock.sleep)
        assert not result.ok
        assert clock.sleeps == []

    def test_zero_attempts_rejected(self):
        with pytest.raises(ValueError):
            poll_until(lambda: True, max_attempts=0, delay=1.0)


class TestPollResult:
    def test_truthiness(self):
        assert PollResult(ok=True, attempts=1)
        assert not PollResult(ok=False, attempts=3)
