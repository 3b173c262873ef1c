"""Custom exception classes for DVSA Bot."""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


class DVSABotError(Exception):
    """Base exception for DVSA Bot."""

    def __init__(
        self, message: str, recoverable: bool = False, details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize DVSA Bot error.

        Args:
            message: Error message
            recoverable: Whether a caller-side retry may succeed
            details: Additional error details
        """
        self.message = message
        self.recoverable = recoverable
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "recoverable": self.recoverable,
            "details": self.details,
            "timestamp": self.timestamp,
        }


# Navigation Errors
class UnexpectedPageStateError(DVSABotError):
    """Observed page does not match the page the next step requires."""

    def __init__(self, expected: str, actual: Optional[str] = None, action: Optional[str] = None):
        """
        Initialize unexpected page state error.

        Args:
            expected: Page the flow expected to be on
            actual: Page (heading, identity or URL) actually observed, if known
            action: Action that was about to be performed, if any
        """
        self.expected = expected
        self.actual = actual
        self.action = action
        message = f"Expected to be on page: [{expected}], actual: [{actual}]"
        if action:
            message += f" (before action: {action})"
        super().__init__(
            message,
            recoverable=False,
            details={"expected": expected, "actual": actual, "action": action},
        )


class NoResultsError(DVSABotError):
    """Test centre search did not render the search results section."""

    def __init__(self, postcode: str, heading: Optional[str] = None):
        self.postcode = postcode
        self.heading = heading
        super().__init__(
            f"No search results found for postcode [{postcode}], heading: [{heading}]",
            recoverable=False,
            details={"postcode": postcode, "heading": heading},
        )


class NotLoggedInError(DVSABotError):
    """Availability was requested before getting past the test date page."""

    def __init__(self, message: str = "Not logged in", actual: Optional[str] = None):
        self.actual = actual
        if actual is not None:
            message = f"{message}, current page: [{actual}]"
        super().__init__(message, recoverable=False, details={"actual": actual})


class QueueTimeoutError(DVSABotError):
    """The queue interstitial did not release the session in time."""

    def __init__(self, timeout: float, url: Optional[str] = None):
        self.timeout = timeout
        self.url = url
        super().__init__(
            f"Still queued after {timeout}s at [{url}]",
            recoverable=True,
            details={"timeout": timeout, "url": url},
        )


# Session Errors
class SessionError(DVSABotError):
    """Session lifecycle misuse."""

    def __init__(
        self,
        message: str = "Session error occurred",
        recoverable: bool = False,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, recoverable, details)


# Configuration Errors
class ConfigurationError(DVSABotError):
    """Configuration error occurred."""

    def __init__(
        self,
        message: str = "Configuration error",
        recoverable: bool = False,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, recoverable, details)


class PropertyOverrideError(ConfigurationError):
    """Raised when a property still holds the override placeholder."""

    def __init__(self, key: str):
        super().__init__(
            f"Please override property [{key}] in system env variables!",
            details={"property": key},
        )


class ProjectRootNotFoundError(ConfigurationError):
    """Raised when no ancestor directory holds the project marker file."""

    def __init__(self, start: str, marker: str):
        super().__init__(
            f"Failed to find project root, missing {marker} in parent of: {start}!",
            details={"start": start, "marker": marker},
        )
