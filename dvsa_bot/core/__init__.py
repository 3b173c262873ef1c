"""Core infrastructure: errors, logging and configuration."""

from .exceptions import (
    # Base exception
    DVSABotError,
    # Navigation
    NoResultsError,
    NotLoggedInError,
    QueueTimeoutError,
    UnexpectedPageStateError,
    # Session
    SessionError,
    # Configuration
    ConfigurationError,
    ProjectRootNotFoundError,
    PropertyOverrideError,
)
from .logger import mask_licence, setup_logging

__all__ = [
    "ConfigurationError",
    "DVSABotError",
    "NoResultsError",
    "NotLoggedInError",
    "ProjectRootNotFoundError",
    "PropertyOverrideError",
    "QueueTimeoutError",
    "SessionError",
    "UnexpectedPageStateError",
    "mask_licence",
    "setup_logging",
]
