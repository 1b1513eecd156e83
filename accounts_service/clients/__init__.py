"""Downstream clients for the Loans and Cards services."""

import httpx

from accounts_service.clients.base import CORRELATION_ID_HEADER, DetailsClient
from accounts_service.clients.cards import CardsClient, CardsFallback
from accounts_service.clients.http_client import HttpDetailsClient
from accounts_service.clients.loans import LoansClient, LoansFallback
from accounts_service.clients.resilience import (
    CircuitBreaker,
    CircuitState,
    ResilientDetailsClient,
)
from accounts_service.config import DownstreamConfig
from accounts_service.models import CardDetails, LoanDetails


def build_loans_client(
    config: DownstreamConfig,
    transport: httpx.BaseTransport | None = None,
) -> ResilientDetailsClient[LoanDetails]:
    """Wire the Loans client with its fallback and circuit breaker."""
    return ResilientDetailsClient(
        primary=LoansClient(config.loans_url, timeout=config.timeout_seconds, transport=transport),
        fallback=LoansFallback(),
        breaker=CircuitBreaker(
            name="loans",
            failure_threshold=config.failure_threshold,
            reset_timeout=config.reset_timeout_seconds,
        ),
    )


def build_cards_client(
    config: DownstreamConfig,
    transport: httpx.BaseTransport | None = None,
) -> ResilientDetailsClient[CardDetails]:
    """Wire the Cards client with its fallback and circuit breaker."""
    return ResilientDetailsClient(
        primary=CardsClient(config.cards_url, timeout=config.timeout_seconds, transport=transport),
        fallback=CardsFallback(),
        breaker=CircuitBreaker(
            name="cards",
            failure_threshold=config.failure_threshold,
            reset_timeout=config.reset_timeout_seconds,
        ),
    )


__all__ = [
    "CORRELATION_ID_HEADER",
    "CardsClient",
    "CardsFallback",
    "CircuitBreaker",
    "CircuitState",
    "DetailsClient",
    "HttpDetailsClient",
    "LoansClient",
    "LoansFallback",
    "ResilientDetailsClient",
    "build_cards_client",
    "build_loans_client",
]
