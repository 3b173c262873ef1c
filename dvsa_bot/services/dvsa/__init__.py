"""DVSA booking site session controller and result types."""

from .models import TimeSlot, discard_empty, epoch_millis_to_datetime, fetch_more_clicks
from .page_state import (
    PageAction,
    PageIdentity,
    PageStateDetector,
    PageStateResult,
    ProbeOutcome,
    VerificationPolicy,
    transition,
)
from .session import DVSASession

__all__ = [
    "DVSASession",
    "PageAction",
    "PageIdentity",
    "PageStateDetector",
    "PageStateResult",
    "ProbeOutcome",
    "TimeSlot",
    "VerificationPolicy",
    "discard_empty",
    "epoch_millis_to_datetime",
    "fetch_more_clicks",
    "transition",
]
