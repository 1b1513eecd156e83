"""httpx-based client for downstream detail services."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from decimal import Decimal, InvalidOperation
from typing import Any, Generic, TypeVar

import httpx

from accounts_service.clients.base import CORRELATION_ID_HEADER
from accounts_service.exceptions import DownstreamUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class HttpDetailsClient(ABC, Generic[T]):
    """Single-attempt GET against a downstream ``/api/fetch`` endpoint.

    Every failure (transport error, timeout, non-2xx status, unparseable
    body) is raised as ``DownstreamUnavailableError``.

    Parameters
    ----------
    base_url : str
        Base URL of the downstream service (e.g. ``"http://loans:8090"``).
    timeout : float
        Timeout in seconds for each phase of a call (connect, write, read,
        pool acquisition).
    transport : httpx.BaseTransport | None
        Optional transport, used by tests to stub the service.
    """

    service_name = "downstream"
    path = "/api/fetch"

    def __init__(
        self,
        base_url: str,
        timeout: float = 3.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        # httpx applies the timeout to each phase (connect, write, read, pool)
        self.client = httpx.Client(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    def close(self) -> None:
        """Close HTTP client."""
        self.client.close()

    def fetch_details(self, mobile_number: str, correlation_id: str) -> T:
        """Fetch details for a customer.

        Parameters
        ----------
        mobile_number : str
            Customer mobile number.
        correlation_id : str
            Request correlation id, sent as a header.

        Returns
        -------
        T
            Parsed details payload.

        Raises
        ------
        DownstreamUnavailableError
            If the call fails for any reason.
        """
        logger.debug(
            "Fetching %s details",
            self.service_name,
            extra={"correlation_id": correlation_id, "mobile_number": mobile_number},
        )
        try:
            response = self.client.get(
                self.path,
                params={"mobileNumber": mobile_number},
                headers={CORRELATION_ID_HEADER: correlation_id},
            )
        except httpx.HTTPError as e:
            raise DownstreamUnavailableError(f"{self.service_name} request failed: {e}") from e

        if not response.is_success:
            raise DownstreamUnavailableError(
                f"{self.service_name} returned HTTP {response.status_code}"
            )

        if not response.content:
            return self.parse({}, mobile_number)

        try:
            payload = response.json()
        except ValueError as e:
            raise DownstreamUnavailableError(f"{self.service_name} returned invalid JSON") from e

        try:
            return self.parse(payload or {}, mobile_number)
        except (AttributeError, KeyError, TypeError, ValueError, InvalidOperation) as e:
            raise DownstreamUnavailableError(
                f"{self.service_name} returned an unexpected payload: {e}"
            ) from e

    @abstractmethod
    def parse(self, payload: dict[str, Any], mobile_number: str) -> T:
        """Convert a JSON payload into the details object."""


def to_decimal(value: Any) -> Decimal:
    """Parse a monetary amount, treating missing values as zero."""
    if value is None:
        return Decimal("0")
    return Decimal(str(value))
