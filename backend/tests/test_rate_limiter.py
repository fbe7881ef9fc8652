"""
TimeTracker Backend - Rate Limiter Unit Tests
=============================================

What we test:
    ✅ Cooldown boundary: 4.999 s rejected, 5.000 s admitted
    ✅ Lockout extension (default) vs the corrected variant
    ✅ Retry-After values for both variants
    ✅ Tokens are independent of each other
    ✅ Simultaneous requests on one token admit exactly one
    ✅ Idle-token sweep
"""

import asyncio

import pytest

from timetracker.services.rate_limiter import RateLimitDecision, TokenRateLimiter


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now


class TestCooldownBoundary:
    def setup_method(self):
        self.clock = FakeClock()

    @pytest.mark.asyncio
    async def test_first_request_is_allowed(self):
        limiter = TokenRateLimiter(clock=self.clock)
        decision = await limiter.check("token-a")
        assert decision.allowed is True
        assert limiter.last_seen("token-a") == 0.0

    @pytest.mark.asyncio
    async def test_request_just_inside_cooldown_is_rejected(self):
        limiter = TokenRateLimiter(extend_on_reject=False, clock=self.clock)
        await limiter.check("token-a")

        self.clock.now = 4.999
        decision = await limiter.check("token-a")

        assert decision.allowed is False

    @pytest.mark.asyncio
    async def test_request_at_exactly_cooldown_is_allowed(self):
        limiter = TokenRateLimiter(extend_on_reject=False, clock=self.clock)
        await limiter.check("token-a")

        self.clock.now = 5.0
        decision = await limiter.check("token-a")

        assert decision.allowed is True
        assert limiter.last_seen("token-a") == 5.0

    @pytest.mark.asyncio
    async def test_tokens_do_not_share_state(self):
        limiter = TokenRateLimiter(clock=self.clock)
        assert (await limiter.check("token-a")).allowed
        assert (await limiter.check("token-b")).allowed
        assert not (await limiter.check("token-a")).allowed


class TestLockoutExtension:
    def setup_method(self):
        self.clock = FakeClock()

    @pytest.mark.asyncio
    async def test_rejection_restarts_the_window_by_default(self):
        """A retry at 4.999 s pushes the unlock time to 9.999 s."""
        limiter = TokenRateLimiter(clock=self.clock)
        await limiter.check("token-a")

        self.clock.now = 4.999
        assert not (await limiter.check("token-a")).allowed
        assert limiter.last_seen("token-a") == 4.999

        self.clock.now = 5.0
        assert not (await limiter.check("token-a")).allowed

        self.clock.now = 10.5
        assert (await limiter.check("token-a")).allowed

    @pytest.mark.asyncio
    async def test_corrected_variant_keeps_the_first_window(self):
        limiter = TokenRateLimiter(extend_on_reject=False, clock=self.clock)
        await limiter.check("token-a")

        self.clock.now = 4.999
        assert not (await limiter.check("token-a")).allowed
        assert limiter.last_seen("token-a") == 0.0

        self.clock.now = 5.0
        assert (await limiter.check("token-a")).allowed

    @pytest.mark.asyncio
    async def test_retry_after_is_full_cooldown_when_extending(self):
        limiter = TokenRateLimiter(clock=self.clock)
        await limiter.check("token-a")
        self.clock.now = 3.0

        decision = await limiter.check("token-a")

        assert decision.retry_after == 5.0
        assert decision.retry_after_seconds == 5

    @pytest.mark.asyncio
    async def test_retry_after_is_remaining_time_when_not_extending(self):
        limiter = TokenRateLimiter(extend_on_reject=False, clock=self.clock)
        await limiter.check("token-a")
        self.clock.now = 3.0

        decision = await limiter.check("token-a")

        assert decision.retry_after == pytest.approx(2.0)
        assert decision.retry_after_seconds == 2


class TestConcurrency:
    @pytest.mark.asyncio
    async def test_simultaneous_requests_admit_exactly_one(self):
        limiter = TokenRateLimiter(clock=FakeClock(100.0))

        decisions = await asyncio.gather(*(limiter.check("shared") for _ in range(50)))

        assert sum(1 for d in decisions if d.allowed) == 1

    @pytest.mark.asyncio
    async def test_simultaneous_requests_on_distinct_tokens_all_pass(self):
        limiter = TokenRateLimiter(clock=FakeClock())

        decisions = await asyncio.gather(*(limiter.check(f"t{i}") for i in range(20)))

        assert all(d.allowed for d in decisions)
        assert len(limiter) == 20


class TestSweep:
    @pytest.mark.asyncio
    async def test_idle_tokens_are_dropped(self):
        clock = FakeClock()
        limiter = TokenRateLimiter(entry_ttl=10.0, sweep_interval=2, clock=clock)

        await limiter.check("idle")
        clock.now = 20.0
        await limiter.check("fresh")  # second check triggers the sweep

        assert limiter.last_seen("idle") is None
        assert limiter.last_seen("fresh") == 20.0
        assert len(limiter) == 1

    @pytest.mark.asyncio
    async def test_swept_token_is_admitted_like_a_new_one(self):
        clock = FakeClock()
        limiter = TokenRateLimiter(entry_ttl=10.0, sweep_interval=1, clock=clock)

        await limiter.check("token-a")
        clock.now = 11.0

        assert (await limiter.check("token-a")).allowed


class TestConfiguration:
    def test_rejects_non_positive_cooldown(self):
        with pytest.raises(ValueError):
            TokenRateLimiter(cooldown=0)

    def test_rejects_ttl_shorter_than_cooldown(self):
        with pytest.raises(ValueError):
            TokenRateLimiter(cooldown=5.0, entry_ttl=1.0)

    @pytest.mark.parametrize(
        "retry_after,expected",
        [(0.2, 1), (2.0, 2), (2.1, 3), (5.0, 5)],
    )
    def test_retry_after_seconds_rounds_up(self, retry_after, expected):
        decision = RateLimitDecision(allowed=False, retry_after=retry_after)
        assert decision.retry_after_seconds == expected

    def test_allowed_decision_has_no_retry_after(self):
        assert RateLimitDecision(allowed=True).retry_after_seconds == 0
