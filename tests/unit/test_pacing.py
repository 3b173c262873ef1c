"""Tests for the pacing policy."""

import random
from unittest.mock import AsyncMock

import pytest

from dvsa_bot.core.config.settings import DVSASettings
from dvsa_bot.services.browser.pacing import PacingPolicy


def test_defaults_match_human_window():
    policy = PacingPolicy()
    assert policy.min_delay == 0.0
    assert policy.jitter == 5.0


def test_negative_delays_rejected():
    with pytest.raises(ValueError):
        PacingPolicy(min_delay=-1)
    with pytest.raises(ValueError):
        PacingPolicy(jitter=-0.5)


def test_next_delay_within_window():
    policy = PacingPolicy(min_delay=1.0, jitter=2.0, rng=random.Random(42))
    for _ in range(200):
        delay = policy.next_delay()
        assert 1.0 <= delay < 3.0


def test_extra_minimum_added():
    policy = PacingPolicy(min_delay=0.5, jitter=0.0)
    assert policy.next_delay(extra_min=2.0) == 2.5


def test_from_settings():
    settings = DVSASettings(pacing_min_delay=0.25, pacing_jitter=1.5)
    policy = PacingPolicy.from_settings(settings)
    assert policy.min_delay == 0.25
    assert policy.jitter == 1.5


@pytest.mark.asyncio
async def test_pause_sleeps_for_drawn_delay():
    sleep = AsyncMock()
    policy = PacingPolicy(min_delay=0.0, jitter=5.0, sleep=sleep, rng=random.Random(7))

    delay = await policy.pause()

    sleep.assert_awaited_once_with(delay)
    assert 0 <= delay < 5.0


@pytest.mark.asyncio
async def test_disabled_never_sleeps():
    policy = PacingPolicy.disabled()
    sleep = AsyncMock()
    policy._sleep = sleep

    assert await policy.pause() == 0.0
    sleep.assert_not_awaited()
