import asyncio

import pytest

from radarr_grab.core.retry import RetryPolicy
from radarr_grab.exceptions import RetryExhaustedError


class Script:
    """Async operation returning (or raising) scripted outcomes in order."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def test_returns_first_accepted_result():
    op = Script([1])
    result = asyncio.run(RetryPolicy(retries=2).execute(op, bool))
    assert result == [1]
    assert op.calls == 1


def test_retries_until_predicate_accepts():
    op = Script([], [], ["x"])
    result = asyncio.run(RetryPolicy(retries=2).execute(op, bool))
    assert result == ["x"]
    assert op.calls == 3


def test_raises_retry_exhausted_when_results_stay_unusable():
    op = Script([], [], [], ["never reached"])
    with pytest.raises(RetryExhaustedError, match="3 attempts"):
        asyncio.run(RetryPolicy(retries=2).execute(op, bool))
    assert op.calls == 3


def test_exceptions_are_retried_and_last_one_reraised():
    op = Script(ValueError("first"), ValueError("second"))
    with pytest.raises(ValueError, match="second"):
        asyncio.run(RetryPolicy(retries=1).execute(op, bool))
    assert op.calls == 2


def test_recovers_after_exception():
    op = Script(ConnectionError("boom"), [1])
    assert asyncio.run(RetryPolicy(retries=1).execute(op, bool)) == [1]


def test_unusable_final_result_wins_over_earlier_exception():
    op = Script(ConnectionError("boom"), [])
    with pytest.raises(RetryExhaustedError):
        asyncio.run(RetryPolicy(retries=1).execute(op, bool))


def test_zero_retries_means_single_attempt():
    op = Script([], [1])
    with pytest.raises(RetryExhaustedError):
        asyncio.run(RetryPolicy(retries=0).execute(op, bool))
    assert op.calls == 1


def test_negative_retries_rejected():
    with pytest.raises(ValueError):
        RetryPolicy(retries=-1)


def test_delay_is_awaited_between_attempts_only(monkeypatch):
    from radarr_grab.core import retry

    pauses = []

    async def fake_sleep(seconds):
        pauses.append(seconds)

    monkeypatch.setattr(retry.asyncio, "sleep", fake_sleep)
    op = Script([], [], [])

    with pytest.raises(RetryExhaustedError):
        asyncio.run(RetryPolicy(retries=2, delay=1.5).execute(op, bool))

    assert pauses == [1.5, 1.5]


def test_no_pause_after_success(monkeypatch):
    from radarr_grab.core import retry

    pauses = []

    async def fake_sleep(seconds):
        pauses.append(seconds)

    monkeypatch.setattr(retry.asyncio, "sleep", fake_sleep)
    op = Script([], ["ok"])

    assert asyncio.run(RetryPolicy(retries=3, delay=2).execute(op, bool)) == ["ok"]
    assert pauses == [2]
