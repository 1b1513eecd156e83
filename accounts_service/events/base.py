"""Outbound event channel contract."""

from typing import Any, Protocol


class EventPublisher(Protocol):
    """Fire-and-forget publisher.

    ``publish`` returns once the record is handed off; it raises
    ``PublishError`` when the hand-off itself fails. Delivery is at most
    once and no acknowledgment is reported back.
    """

    def publish(self, topic: str, record: Any, key: str | None = None) -> None: ...

    def close(self) -> None: ...
