"""Core data models for Message Sender."""

from .records import PLAYER_KEY_RANGE, MessagePayload, MessageRecord
from .results import BatchReport, RoundTrip

__all__ = [
    # Records
    "PLAYER_KEY_RANGE",
    "MessagePayload",
    "MessageRecord",
    # Results
    "RoundTrip",
    "BatchReport",
]
