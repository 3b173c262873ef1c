"""Result types and pure helpers for availability checks."""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Union

from ...constants import SearchResults


@dataclass
class TimeSlot:
    """Bookable slots at one test centre."""

    name: str
    address: str
    dates: List[datetime] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "name": self.name,
            "address": self.address,
            "dates": [d.isoformat() for d in self.dates],
        }


def fetch_more_clicks(
    num_centres: int, per_fetch: int = SearchResults.CENTRES_PER_FETCH
) -> int:
    """
    Number of "fetch more centres" clicks needed to list ``num_centres`` entries.

    >>> fetch_more_clicks(80)
    20
    >>> fetch_more_clicks(1)
    1
    >>> fetch_more_clicks(0)
    0
    """
    if num_centres <= 0:
        return 0
    return math.ceil(num_centres / per_fetch)


def epoch_millis_to_datetime(value: Union[str, int]) -> datetime:
    """
    Convert a millisecond epoch to a UTC datetime, dropping sub-second precision.

    Args:
        value: Milliseconds since the Unix epoch, as read from a slot attribute

    Raises:
        ValueError: If value is not an integer
    """
    seconds = int(str(value).strip()) // 1000
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


def discard_empty(slots: Iterable[TimeSlot]) -> List[TimeSlot]:
    """Drop results whose detail page exposed no dates, keeping order."""
    return [slot for slot in slots if slot.dates]
