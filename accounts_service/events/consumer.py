"""Kafka consumer that marks accounts as communicated."""

from __future__ import annotations

import json
import logging
import threading
from typing import TYPE_CHECKING, Any

from confluent_kafka import Consumer, KafkaError

from accounts_service.config import KafkaConfig, TopicConfig
from accounts_service.exceptions import ResourceNotFoundError, ValidationError

if TYPE_CHECKING:
    from accounts_service.services.accounts import AccountsService

logger = logging.getLogger(__name__)


def parse_account_number(value: bytes | str | None) -> int:
    """Extract an account number from a message value.

    Accepts a bare number (``1234567890`` or ``"1234567890"``) or an
    object with an ``accountNumber`` field.

    Raises
    ------
    ValidationError
        If the value does not carry a usable account number.
    """
    if value is None:
        raise ValidationError("accountNumber", "Message has no value")
    try:
        data: Any = json.loads(value)
    except (UnicodeDecodeError, ValueError) as e:
        raise ValidationError("accountNumber", f"Message is not valid JSON: {e}") from e

    if isinstance(data, dict):
        data = data.get("accountNumber")
    if isinstance(data, bool):
        raise ValidationError("accountNumber", "Account number must be numeric")
    try:
        return int(data)
    except (TypeError, ValueError) as e:
        raise ValidationError("accountNumber", "Account number must be numeric") from e


class CommunicationStatusConsumer:
    """Consume communication-sent events and update account status.

    Parameters
    ----------
    service : AccountsService
        Service whose ``update_communication_status`` is called.
    kafka : KafkaConfig
        Broker configuration.
    topics : TopicConfig
        Topic and consumer group names.
    consumer : Consumer | None
        Pre-built consumer, used by tests.
    """

    def __init__(
        self,
        service: AccountsService,
        kafka: KafkaConfig | None = None,
        topics: TopicConfig | None = None,
        consumer: Consumer | None = None,
    ) -> None:
        self.service = service
        self.kafka = kafka or KafkaConfig()
        self.topics = topics or TopicConfig()
        self.consumer = consumer or Consumer(
            {
                "bootstrap.servers": self.kafka.bootstrap_servers,
                "group.id": self.topics.consumer_group,
                "auto.offset.reset": "earliest",
            }
        )
        self.processed = 0
        self.skipped = 0
        self._stop = threading.Event()
        self._subscribed = False

    def handle_value(self, value: bytes | str | None) -> bool:
        """Apply one message value. Returns True if an account was updated."""
        try:
            account_number = parse_account_number(value)
            updated = self.service.update_communication_status(account_number)
        except (ValidationError, ResourceNotFoundError) as e:
            self.skipped += 1
            logger.warning("Skipping communication event: %s", e)
            return False

        self.processed += 1
        logger.info(
            "Communication status updated",
            extra={"account_number": account_number, "topic": self.topics.communication_sent},
        )
        return updated

    def poll_once(self, timeout: float = 1.0) -> bool:
        """Poll for a single message and handle it.

        Returns
        -------
        bool
            True if a message was received and applied.
        """
        if not self._subscribed:
            self.consumer.subscribe([self.topics.communication_sent])
            self._subscribed = True

        msg = self.consumer.poll(timeout)
        if msg is None:
            return False
        if msg.error():
            if msg.error().code() != KafkaError._PARTITION_EOF:
                logger.error("Consumer error: %s", msg.error())
            return False
        return self.handle_value(msg.value())

    def run(self, max_messages: int | None = None, timeout: float = 1.0) -> None:
        """Poll until ``stop()`` is called or ``max_messages`` were seen."""
        logger.info("Consuming from %s", self.topics.communication_sent)
        try:
            while not self._stop.is_set():
                self.poll_once(timeout)
                if max_messages is not None and self.processed + self.skipped >= max_messages:
                    break
        finally:
            self.consumer.close()
            logger.info(
                "Consumer closed: processed=%d, skipped=%d", self.processed, self.skipped
            )

    def stop(self) -> None:
        """Ask ``run`` to exit after the current poll."""
        self._stop.set()
