"""Outbound and inbound event channels."""

from accounts_service.events.base import EventPublisher
from accounts_service.events.console import ConsolePublisher
from accounts_service.events.consumer import CommunicationStatusConsumer
from accounts_service.events.kafka import KafkaPublisher

__all__ = [
    "CommunicationStatusConsumer",
    "ConsolePublisher",
    "EventPublisher",
    "KafkaPublisher",
]
