"""Human-like pacing between page actions."""

import asyncio
import random
from typing import Awaitable, Callable, Optional

from loguru import logger

from ...constants import Delays

SleepFunc = Callable[[float], Awaitable[None]]


class PacingPolicy:
    """
    Randomized pause inserted between page actions.

    Each pause lasts ``min_delay + extra_min + U[0, jitter)`` seconds. The sleep
    primitive and random source are injectable so tests can observe or skip
    the waits.
    """

    def __init__(
        self,
        min_delay: float = Delays.PACING_MIN,
        jitter: float = Delays.PACING_JITTER,
        sleep: Optional[SleepFunc] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize pacing policy.

        Args:
            min_delay: Minimum pause in seconds
            jitter: Width of the random extra pause in seconds
            sleep: Async sleep primitive (defaults to asyncio.sleep)
            rng: Random source (defaults to the module-level generator)
        """
        if min_delay < 0 or jitter < 0:
            raise ValueError("Pacing delays must be non-negative")
        self.min_delay = min_delay
        self.jitter = jitter
        self._sleep: SleepFunc = sleep or asyncio.sleep
        self._rng = rng or random.Random()

    @classmethod
    def from_settings(cls, settings) -> "PacingPolicy":
        """Build a policy from DVSASettings."""
        return cls(min_delay=settings.pacing_min_delay, jitter=settings.pacing_jitter)

    @classmethod
    def disabled(cls) -> "PacingPolicy":
        """Policy that never waits."""
        return cls(min_delay=0.0, jitter=0.0)

    def next_delay(self, extra_min: float = 0.0) -> float:
        """Draw the next pause length in seconds."""
        return self._rng.random() * self.jitter + self.min_delay + extra_min

    async def pause(self, extra_min: float = 0.0) -> float:
        """
        Sleep for one randomized pause.

        Args:
            extra_min: Additional minimum for this pause only (seconds)

        Returns:
            The pause length in seconds
        """
        delay = self.next_delay(extra_min)
        if delay > 0:
            logger.debug(f"Pacing for {delay:.2f}s")
            await self._sleep(delay)
        return delay
