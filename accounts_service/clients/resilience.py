"""Circuit breaker and fallback selection for downstream detail clients.

State Machine:
    CLOSED → (failure_threshold consecutive failures) → OPEN
    OPEN → (reset_timeout elapsed) → HALF_OPEN
    HALF_OPEN → (trial call succeeds) → CLOSED
    HALF_OPEN → (trial call fails) → OPEN

Example:
    >>> client = ResilientDetailsClient(
    ...     primary=LoansClient("http://loans:8090"),
    ...     fallback=LoansFallback(),
    ...     breaker=CircuitBreaker(name="loans"),
    ... )
    >>> details = client.fetch_details("9876543210", correlation_id="abc123")
    >>> details.available  # False when the fallback answered
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from enum import Enum
from typing import Generic, TypeVar

from accounts_service.clients.base import DetailsClient
from accounts_service.exceptions import DownstreamUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CircuitState(str, Enum):
    """Circuit breaker states.

    CLOSED: calls go to the primary
    OPEN: calls skip the primary and use the fallback
    HALF_OPEN: one trial call is let through to the primary
    """

    CLOSED = "CLOSED"
    OPEN = "OPEN"
    HALF_OPEN = "HALF_OPEN"


class CircuitBreaker:
    """In-process circuit breaker guarding one downstream service.

    Parameters
    ----------
    name : str
        Service name used in log messages.
    failure_threshold : int
        Consecutive failures that open the circuit.
    reset_timeout : float
        Seconds the circuit stays open before a trial call.
    clock : Callable[[], float]
        Monotonic clock, injectable for tests.
    """

    def __init__(
        self,
        name: str = "downstream",
        failure_threshold: int = 5,
        reset_timeout: float = 30.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if failure_threshold < 1:
            raise ValueError("failure_threshold must be at least 1")
        self.name = name
        self.failure_threshold = failure_threshold
        self.reset_timeout = reset_timeout
        self._clock = clock
        self._lock = threading.Lock()
        self._state = CircuitState.CLOSED
        self._failures = 0
        self._opened_at: float | None = None
        self._trial_in_flight = False

    @property
    def state(self) -> CircuitState:
        """Current state, promoting OPEN to HALF_OPEN once the timeout elapsed."""
        with self._lock:
            self._maybe_half_open()
            return self._state

    def allow_request(self) -> bool:
        """Return True if a call to the primary may be attempted now."""
        with self._lock:
            self._maybe_half_open()
            if self._state == CircuitState.CLOSED:
                return True
            if self._state == CircuitState.HALF_OPEN and not self._trial_in_flight:
                self._trial_in_flight = True
                return True
            return False

    def record_success(self) -> None:
        """Close the circuit after a successful call."""
        with self._lock:
            if self._state != CircuitState.CLOSED:
                logger.info("Circuit %s closed", self.name)
            self._state = CircuitState.CLOSED
            self._failures = 0
            self._opened_at = None
            self._trial_in_flight = False

    def record_failure(self) -> None:
        """Count a failed call, opening the circuit at the threshold."""
        with self._lock:
            self._failures += 1
            self._trial_in_flight = False
            if self._state == CircuitState.HALF_OPEN or self._failures >= self.failure_threshold:
                if self._state != CircuitState.OPEN:
                    logger.warning(
                        "Circuit %s opened after %d consecutive failures",
                        self.name,
                        self._failures,
                    )
                self._state = CircuitState.OPEN
                self._opened_at = self._clock()

    def _maybe_half_open(self) -> None:
        if (
            self._state == CircuitState.OPEN
            and self._opened_at is not None
            and self._clock() - self._opened_at >= self.reset_timeout
        ):
            self._state = CircuitState.HALF_OPEN
            self._trial_in_flight = False


class ResilientDetailsClient(Generic[T]):
    """Call the primary client once and answer with the fallback on failure.

    Satisfies ``DetailsClient`` itself, so callers cannot tell which
    implementation produced the result other than through the payload.

    Parameters
    ----------
    primary : DetailsClient[T]
        Real downstream client.
    fallback : DetailsClient[T]
        Static fallback; must never raise.
    breaker : CircuitBreaker | None
        Optional breaker. When open, the primary is skipped.
    """

    def __init__(
        self,
        primary: DetailsClient[T],
        fallback: DetailsClient[T],
        breaker: CircuitBreaker | None = None,
    ) -> None:
        self.primary = primary
        self.fallback = fallback
        self.breaker = breaker

    def fetch_details(self, mobile_number: str, correlation_id: str) -> T:
        if self.breaker is not None and not self.breaker.allow_request():
            logger.info(
                "Circuit %s is open, using fallback",
                self.breaker.name,
                extra={"correlation_id": correlation_id},
            )
            return self.fallback.fetch_details(mobile_number, correlation_id)

        try:
            details = self.primary.fetch_details(mobile_number, correlation_id)
        except Exception as e:
            # Any failure is an outcome, so a half-open trial never stays in flight.
            if self.breaker is not None:
                self.breaker.record_failure()
            logger.warning(
                "Downstream call failed, using fallback: %s",
                e,
                exc_info=not isinstance(e, DownstreamUnavailableError),
                extra={"correlation_id": correlation_id},
            )
            return self.fallback.fetch_details(mobile_number, correlation_id)

        if self.breaker is not None:
            self.breaker.record_success()
        return details

    def close(self) -> None:
        """Close the primary client if it holds resources."""
        close = getattr(self.primary, "close", None)
        if close is not None:
            close()
