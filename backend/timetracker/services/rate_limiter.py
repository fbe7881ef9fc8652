"""
TimeTracker Backend - Per-Token Cooldown Limiter
=================================================

What:  Remembers when each bearer token was last seen and rejects a request
       that arrives less than `cooldown` seconds after the previous one.
Who:   RateLimitMiddleware, once per /api/ request that carries a token.

Algorithm (per token):
    1. Unseen token               → record now, allow
    2. elapsed = now - last_seen
       elapsed <  cooldown        → reject; re-stamp last_seen = now when
                                    extend_on_reject is True
       elapsed >= cooldown        → allow, last_seen = now

    With the default 5 s cooldown:
        t=0.000 allow · t=4.999 reject · t=5.000 allow   (extend_on_reject=False)
        t=0.000 allow · t=4.999 reject · t=5.000 reject  (extend_on_reject=True,
                                                          lockout restarted at 4.999)

Lockout extension:
    extend_on_reject=True is the default: a client that keeps
    retrying inside the window pushes its own unlock time forward. False is
    the corrected variant where only admitted requests count.

Concurrency:
    check-and-stamp runs under an asyncio.Lock, so N simultaneous requests
    with one token admit at most one per cooldown window.

Memory:
    Every `sweep_interval` checks, tokens idle for longer than `entry_ttl`
    are dropped. entry_ttl >= cooldown, so a dropped token would have been
    admitted anyway and decisions are unchanged.

Limitations:
    State lives in this process only. Several workers or instances each keep
    their own map, so a client spreading requests across them is not limited.
"""

import asyncio
import logging
import math
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    retry_after: float = 0.0

    @property
    def retry_after_seconds(self) -> int:
        """Whole seconds for the Retry-After header (at least 1 when rejected)."""
        if self.allowed:
            return 0
        return max(1, math.ceil(self.retry_after))


class TokenRateLimiter:
    """In-memory cooldown gate keyed by bearer token string."""

    def __init__(
        self,
        cooldown: float = 5.0,
        extend_on_reject: bool = True,
        entry_ttl: float = 3600.0,
        sweep_interval: int = 1000,
        clock: Callable[[], float] = time.monotonic,
    ):
        if cooldown <= 0:
            raise ValueError("cooldown must be positive")
        if entry_ttl < cooldown:
            raise ValueError("entry_ttl must be >= cooldown")
        self.cooldown = cooldown
        self.extend_on_reject = extend_on_reject
        self.entry_ttl = entry_ttl
        self.sweep_interval = max(1, sweep_interval)
        self._clock = clock
        self._last_seen: Dict[str, float] = {}
        self._checks = 0
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._last_seen)

    def last_seen(self, token: str) -> Optional[float]:
        return self._last_seen.get(token)

    async def check(self, token: str) -> RateLimitDecision:
        """Decide whether a request carrying `token` may proceed, and record it."""
        async with self._lock:
            now = self._clock()
            self._checks += 1
            if self._checks % self.sweep_interval == 0:
                self._sweep(now)

            last = self._last_seen.get(token)
            if last is not None:
                elapsed = now - last
                if elapsed < self.cooldown:
                    if self.extend_on_reject:
                        self._last_seen[token] = now
                        retry_after = self.cooldown
                    else:
                        retry_after = self.cooldown - elapsed
                    return RateLimitDecision(allowed=False, retry_after=retry_after)

            self._last_seen[token] = now
            return RateLimitDecision(allowed=True)

    def _sweep(self, now: float) -> None:
        stale = [t for t, seen in self._last_seen.items() if now - seen > self.entry_ttl]
        for token in stale:
            del self._last_seen[token]
        if stale:
            logger.debug("Swept %d idle tokens from the rate limiter", len(stale))
