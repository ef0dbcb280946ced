"""Bounded retry policy for provider calls.

A fixed delay between attempts, no backoff and no jitter; attempts are strictly
sequential. The sleep function is injectable so tests never actually wait.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 3
    delay: float = 2.0
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.delay < 0:
            raise ValueError("delay must not be negative")

    async def run(
        self,
        call: Callable[[], Awaitable[T]],
        *,
        retry_on: Callable[[Exception], bool],
    ) -> T:
        """Await ``call()`` until it succeeds or attempts run out.

        Only exceptions for which ``retry_on`` returns True are retried; the
        last one is re-raised when every attempt failed.
        """
        for attempt in range(1, self.max_attempts + 1):
            try:
                return await call()
            except Exception as exc:
                if attempt >= self.max_attempts or not retry_on(exc):
                    raise
                logger.debug(
                    "Attempt %d/%d failed (%s); retrying in %.1fs",
                    attempt, self.max_attempts, exc, self.delay,
                )
                await self.sleep(self.delay)
        raise AssertionError("unreachable")
