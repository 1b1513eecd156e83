"""Contract shared by downstream detail clients and their fallbacks."""

from typing import Protocol, TypeVar

T_co = TypeVar("T_co", covariant=True)

CORRELATION_ID_HEADER = "accountsservice-correlation-id"


class DetailsClient(Protocol[T_co]):
    """Fetch a summary for a customer from a downstream service.

    Primary clients, fallbacks and resilient wrappers all satisfy this,
    so callers never need to know which one answered.
    """

    def fetch_details(self, mobile_number: str, correlation_id: str) -> T_co: ...
