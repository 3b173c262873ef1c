"""Timing-related constants (timeouts, delays)."""

from typing import Final


class Timeouts:
    """Timeout values - MILLISECONDS for Playwright, SECONDS noted separately."""

    # Playwright timeouts (milliseconds)
    NAVIGATION: Final[int] = 30_000
    # 0 disables the Playwright timeout entirely
    QUEUE_UNBOUNDED: Final[int] = 0


class Delays:
    """Human pacing delays in SECONDS."""

    PACING_MIN: Final[float] = 0.0
    PACING_JITTER: Final[float] = 5.0

    # Per-character typing delay (milliseconds); the site throttles paste-like input
    TYPING_PER_CHAR_MS: Final[int] = 100
