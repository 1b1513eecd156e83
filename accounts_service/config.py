"""Configuration management for accounts-service."""

import os
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from accounts_service.exceptions import ConfigurationError

DEFAULT_BRANCH_ADDRESS = "123 Main Street, New York"


def _env_number(name: str, default: Any, cast: Callable[[str], Any]) -> Any:
    """Read a numeric environment variable, raising ConfigurationError if malformed."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number: {e}") from e


@dataclass
class KafkaConfig:
    """Kafka client configuration."""

    bootstrap_servers: str = "localhost:9092"
    acks: str = "all"
    linger_ms: int = 5
    retries: int = 3

    def to_dict(self) -> dict[str, Any]:
        """Convert to confluent-kafka producer config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "acks": self.acks,
            "linger.ms": self.linger_ms,
            "retries": self.retries,
        }


@dataclass
class TopicConfig:
    """Topic names for outbound and inbound communication events."""

    send_communication: str = "send-communication"
    communication_sent: str = "communication-sent"
    consumer_group: str = "accounts"


@dataclass
class DownstreamConfig:
    """Loans and Cards service endpoints and resilience settings.

    ``timeout_seconds`` bounds each phase of a call (connect, write, read,
    pool acquisition) separately, as httpx applies it. A call that stalls
    in several phases can take longer than ``timeout_seconds`` overall.
    """

    loans_url: str = "http://loans:8090"
    cards_url: str = "http://cards:9000"
    timeout_seconds: float = 3.0
    failure_threshold: int = 5
    reset_timeout_seconds: float = 30.0

    def __post_init__(self) -> None:
        if self.timeout_seconds <= 0:
            raise ConfigurationError("Downstream timeout must be positive")
        if self.failure_threshold < 1:
            raise ConfigurationError("Circuit failure threshold must be at least 1")
        if self.reset_timeout_seconds < 0:
            raise ConfigurationError("Circuit reset timeout can not be negative")


@dataclass
class AccountNumberConfig:
    """Reserved 10-digit range for generated account numbers.

    Numbers are drawn from ``[offset, offset + span)``.
    """

    offset: int = 1_000_000_000
    span: int = 900_000_000

    def __post_init__(self) -> None:
        if self.span <= 0:
            raise ConfigurationError("Account number span must be positive")
        if self.offset < 1_000_000_000 or self.offset + self.span - 1 > 9_999_999_999:
            raise ConfigurationError(
                f"Account number range [{self.offset}, {self.offset + self.span}) is not 10 digits"
            )

    @property
    def upper_bound(self) -> int:
        """Largest account number in the range (inclusive)."""
        return self.offset + self.span - 1


@dataclass
class ServiceConfig:
    """Main configuration for accounts-service."""

    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    topics: TopicConfig = field(default_factory=TopicConfig)
    downstream: DownstreamConfig = field(default_factory=DownstreamConfig)
    account_numbers: AccountNumberConfig = field(default_factory=AccountNumberConfig)
    branch_address: str = DEFAULT_BRANCH_ADDRESS
    log_level: str = "INFO"
    log_format: str = "standard"
    seed: int | None = None

    @classmethod
    def from_env(cls) -> "ServiceConfig":
        """Create config from environment variables."""
        kafka = KafkaConfig(
            bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
            acks=os.getenv("KAFKA_ACKS", "all"),
        )

        topics = TopicConfig(
            send_communication=os.getenv("SEND_COMMUNICATION_TOPIC", "send-communication"),
            communication_sent=os.getenv("COMMUNICATION_SENT_TOPIC", "communication-sent"),
            consumer_group=os.getenv("CONSUMER_GROUP", "accounts"),
        )

        downstream = DownstreamConfig(
            loans_url=os.getenv("LOANS_URL", "http://loans:8090"),
            cards_url=os.getenv("CARDS_URL", "http://cards:9000"),
            timeout_seconds=_env_number("DOWNSTREAM_TIMEOUT", 3.0, float),
            failure_threshold=_env_number("CIRCUIT_FAILURE_THRESHOLD", 5, int),
            reset_timeout_seconds=_env_number("CIRCUIT_RESET_TIMEOUT", 30.0, float),
        )

        seed = _env_number("SEED", None, int)

        return cls(
            kafka=kafka,
            topics=topics,
            downstream=downstream,
            branch_address=os.getenv("BRANCH_ADDRESS", DEFAULT_BRANCH_ADDRESS),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
            seed=seed,
        )
