"""Constants for DVSA-Bot.

All classes can be imported directly from this package:
    from dvsa_bot.constants import Timeouts, Selectors, PageTitles
"""

from .site import PageTitles, SearchResults, Selectors, URLs
from .timing import Delays, Timeouts

__all__ = [
    "Delays",
    "PageTitles",
    "SearchResults",
    "Selectors",
    "Timeouts",
    "URLs",
]
