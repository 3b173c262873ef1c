"""Tests for TimeSlot and availability helpers."""

from datetime import datetime, timezone

import pytest

from dvsa_bot.services.dvsa.models import (
    TimeSlot,
    discard_empty,
    epoch_millis_to_datetime,
    fetch_more_clicks,
)


class TestFetchMoreClicks:
    """Tests for the fetch-more click count."""

    @pytest.mark.parametrize(
        "centres,clicks", [(80, 20), (1, 1), (0, 0), (4, 1), (5, 2), (8, 2), (-3, 0)]
    )
    def test_ceil_of_quarter(self, centres, clicks):
        assert fetch_more_clicks(centres) == clicks

    def test_custom_page_size(self):
        assert fetch_more_clicks(10, per_fetch=5) == 2


class TestEpochConversion:
    """Tests for millisecond epoch conversion."""

    def test_sub_second_truncated(self):
        assert epoch_millis_to_datetime("1700000000500") == epoch_millis_to_datetime(
            "1700000000000"
        )

    def test_value(self):
        assert epoch_millis_to_datetime(1700000000000) == datetime(
            2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc
        )

    def test_whitespace_tolerated(self):
        assert epoch_millis_to_datetime(" 1700000000999 ").second == 20

    @pytest.mark.parametrize("value", ["", "abc", None])
    def test_invalid_value_raises(self, value):
        with pytest.raises(ValueError):
            epoch_millis_to_datetime(value)


class TestDiscardEmpty:
    """Tests for dropping results without dates."""

    def test_keeps_order_and_drops_empty(self):
        when = datetime(2026, 11, 12, 9, 0, tzinfo=timezone.utc)
        slots = [
            TimeSlot("A", "a", [when]),
            TimeSlot("B", "b", []),
            TimeSlot("C", "c", [when, when]),
        ]

        assert [s.name for s in discard_empty(slots)] == ["A", "C"]

    def test_idempotent(self):
        when = datetime(2026, 11, 12, 9, 0, tzinfo=timezone.utc)
        slots = [TimeSlot("A", "a", []), TimeSlot("B", "b", [when])]

        once = discard_empty(slots)
        assert discard_empty(once) == once


def test_time_slot_to_dict():
    slot = TimeSlot(
        name="Mill Hill",
        address="Bunns Lane, London",
        dates=[datetime(2026, 11, 12, 9, 7, tzinfo=timezone.utc)],
    )

    assert slot.to_dict() == {
        "name": "Mill Hill",
        "address": "Bunns Lane, London",
        "dates": ["2026-11-12T09:07:00+00:00"],
    }
