"""Synthetic message batch generator."""

from ..models import MessagePayload, MessageRecord


def create_messages(message_count: int) -> list[MessageRecord]:
    """Build message_count records with ids 0..message_count-1."""
    if isinstance(message_count, bool) or not isinstance(message_count, int):
        raise ValueError(f"message_count must be an int, got {message_count!r}")
    if message_count < 1:
        raise ValueError(f"message_count must be >= 1, got {message_count}")

    return [
        MessageRecord(id=i, message_json=MessagePayload.for_index(i).to_json())
        for i in range(message_count)
    ]
