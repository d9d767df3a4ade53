"""Tests for the retry + model fallback loop."""

import pytest

from utils.retry import (
    IMAGE_RETRY_SCHEDULE,
    TEXT_RETRY_SCHEDULE,
    ModelOverloadedError,
    ProviderErrorKind,
    QuotaExceededError,
    RetrySchedule,
    call_with_fallback,
    call_with_retry,
)


class Overloaded(Exception):
    pass


class OutOfQuota(Exception):
    pass


def classify(exc):
    if isinstance(exc, Overloaded):
        return ProviderErrorKind.OVERLOADED
    if isinstance(exc, OutOfQuota):
        return ProviderErrorKind.QUOTA_EXCEEDED
    return ProviderErrorKind.OTHER


class ScriptedCall:
    """Async callable replaying per-model outcome scripts."""

    def __init__(self, **scripts):
        self.scripts = {model.replace("_", "-"): list(outcomes) for model, outcomes in scripts.items()}
        self.calls = []

    async def __call__(self, model):
        self.calls.append(model)
        outcome = self.scripts[model].pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


def no_jitter():
    return 0.0


class TestRetrySchedule:
    """Tests for RetrySchedule."""

    def test_default_schedules(self):
        assert TEXT_RETRY_SCHEDULE.delays_ms == (0, 500, 1200, 2500, 4500, 8000)
        assert TEXT_RETRY_SCHEDULE.attempts == 6
        assert IMAGE_RETRY_SCHEDULE.delays_ms == (0, 600, 1400, 2800, 5200, 9000)
        assert IMAGE_RETRY_SCHEDULE.max_jitter_ms == 250

    def test_first_attempt_has_no_wait(self):
        assert TEXT_RETRY_SCHEDULE.wait_seconds(0, jitter=lambda: 0.99) == 0.0

    def test_jitter_bounded(self):
        schedule = RetrySchedule(delays_ms=(0, 1000), max_jitter_ms=250)

        assert schedule.wait_seconds(1, jitter=no_jitter) == 1.0
        assert schedule.wait_seconds(1, jitter=lambda: 0.999) == pytest.approx(1.249)


class TestCallWithRetry:
    """Tests for call_with_retry()."""

    @pytest.mark.asyncio
    async def test_retries_overload_then_succeeds(self, sleep_recorder):
        call = ScriptedCall(m=[Overloaded(), Overloaded(), "ok"])

        result = await call_with_retry(call, "m", classify, sleep=sleep_recorder, jitter=no_jitter)

        assert result == "ok"
        assert call.calls == ["m", "m", "m"]
        assert sleep_recorder.waits == [0.5, 1.2]

    @pytest.mark.asyncio
    async def test_gives_up_after_schedule(self, sleep_recorder):
        call = ScriptedCall(m=[Overloaded() for _ in range(6)])

        with pytest.raises(Overloaded):
            await call_with_retry(call, "m", classify, sleep=sleep_recorder, jitter=no_jitter)

        assert len(call.calls) == 6
        assert sleep_recorder.waits == [0.5, 1.2, 2.5, 4.5, 8.0]

    @pytest.mark.asyncio
    async def test_quota_not_retried(self, sleep_recorder):
        call = ScriptedCall(m=[OutOfQuota()])

        with pytest.raises(OutOfQuota):
            await call_with_retry(call, "m", classify, sleep=sleep_recorder)

        assert call.calls == ["m"]
        assert sleep_recorder.waits == []


class TestCallWithFallback:
    """Tests for call_with_fallback()."""

    @pytest.mark.asyncio
    async def test_first_model_success(self, sleep_recorder):
        call = ScriptedCall(a=["ok"], b=["unused"])

        result = await call_with_fallback(call, ["a", "b"], classify, sleep=sleep_recorder)

        assert result == "ok"
        assert call.calls == ["a"]

    @pytest.mark.asyncio
    async def test_quota_falls_back_to_next_model(self, sleep_recorder):
        call = ScriptedCall(a=[OutOfQuota()], b=["ok"])

        result = await call_with_fallback(call, ["a", "b"], classify, sleep=sleep_recorder)

        assert result == "ok"
        assert call.calls == ["a", "b"]
        assert sleep_recorder.waits == []

    @pytest.mark.asyncio
    async def test_exhausted_overload_falls_back(self, sleep_recorder):
        call = ScriptedCall(a=[Overloaded() for _ in range(6)], b=["ok"])

        result = await call_with_fallback(
            call, ["a", "b"], classify, sleep=sleep_recorder, jitter=no_jitter
        )

        assert result == "ok"
        assert call.calls == ["a"] * 6 + ["b"]

    @pytest.mark.asyncio
    async def test_other_error_propagates_immediately(self, sleep_recorder):
        call = ScriptedCall(a=[ValueError("bad request")], b=["unused"])

        with pytest.raises(ValueError, match="bad request"):
            await call_with_fallback(call, ["a", "b"], classify, sleep=sleep_recorder)

        assert call.calls == ["a"]

    @pytest.mark.asyncio
    async def test_all_quota_raises_quota_exceeded_with_hint(self, sleep_recorder):
        call = ScriptedCall(a=[OutOfQuota("a out")], b=[OutOfQuota("b out")])

        with pytest.raises(QuotaExceededError) as exc_info:
            await call_with_fallback(
                call, ["a", "b"], classify, retry_after=lambda e: 13, sleep=sleep_recorder
            )

        assert exc_info.value.retry_after_seconds == 13
        assert str(exc_info.value) == "b out"
        assert isinstance(exc_info.value.last_error, OutOfQuota)

    @pytest.mark.asyncio
    async def test_last_error_decides_outcome(self, sleep_recorder):
        call = ScriptedCall(a=[OutOfQuota()], b=[Overloaded() for _ in range(6)])

        with pytest.raises(ModelOverloadedError):
            await call_with_fallback(
                call, ["a", "b"], classify, sleep=sleep_recorder, jitter=no_jitter
            )

    @pytest.mark.asyncio
    async def test_overload_then_quota_reports_quota(self, sleep_recorder):
        call = ScriptedCall(a=[Overloaded() for _ in range(6)], b=[OutOfQuota()])

        with pytest.raises(QuotaExceededError) as exc_info:
            await call_with_fallback(
                call, ["a", "b"], classify, sleep=sleep_recorder, jitter=no_jitter
            )

        assert exc_info.value.retry_after_seconds is None

    @pytest.mark.asyncio
    async def test_no_models_rejected(self, sleep_recorder):
        call = ScriptedCall()

        with pytest.raises(ValueError, match="At least one model"):
            await call_with_fallback(call, [], classify, sleep=sleep_recorder)

        assert call.calls == []


class TestEmptySchedule:
    """A schedule without attempts is a configuration error, not a silent no-op."""

    @pytest.mark.asyncio
    async def test_call_with_retry_rejects_empty_schedule(self, sleep_recorder):
        call = ScriptedCall(m=["ok"])

        with pytest.raises(ValueError, match="at least one attempt"):
            await call_with_retry(
                call, "m", classify, schedule=RetrySchedule(delays_ms=()), sleep=sleep_recorder
            )

        assert call.calls == []

    @pytest.mark.asyncio
    async def test_fallback_propagates_empty_schedule_error(self, sleep_recorder):
        call = ScriptedCall(a=["ok"], b=["ok"])

        with pytest.raises(ValueError):
            await call_with_fallback(
                call, ["a", "b"], classify, schedule=RetrySchedule(delays_ms=()), sleep=sleep_recorder
            )

        assert call.calls == []
