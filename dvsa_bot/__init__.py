"""DVSA-Bot - Practical driving test availability checker."""

__version__ = "1.0.0"
__license__ = "MIT"

from .core.exceptions import (
    DVSABotError,
    NoResultsError,
    NotLoggedInError,
    UnexpectedPageStateError,
)
from .services.dvsa import DVSASession, TimeSlot

__all__ = [
    "DVSABotError",
    "DVSASession",
    "NoResultsError",
    "NotLoggedInError",
    "TimeSlot",
    "UnexpectedPageStateError",
    "__version__",
]
