"""Customer profile aggregation across the Loans and Cards services."""

import logging
import uuid
from concurrent.futures import ThreadPoolExecutor

from accounts_service import mappers
from accounts_service.clients.base import DetailsClient
from accounts_service.models import CardDetails, CustomerDetails, LoanDetails
from accounts_service.services.accounts import load_customer_and_account
from accounts_service.store.base import RecordStore

logger = logging.getLogger(__name__)


def new_correlation_id() -> str:
    """Generate a correlation id for one inbound request."""
    return uuid.uuid4().hex


class CustomersService:
    """Build a customer's full profile.

    The Loans and Cards lookups run concurrently on a small thread pool.
    Each client is called exactly once per request and is expected to
    answer with a fallback value rather than raise.

    Parameters
    ----------
    store : RecordStore
        Persistence for customers and accounts.
    loans_client : DetailsClient[LoanDetails]
        Loans lookup, normally a ``ResilientDetailsClient``.
    cards_client : DetailsClient[CardDetails]
        Cards lookup, normally a ``ResilientDetailsClient``.
    max_workers : int
        Size of the thread pool used for downstream calls.
    """

    def __init__(
        self,
        store: RecordStore,
        loans_client: DetailsClient[LoanDetails],
        cards_client: DetailsClient[CardDetails],
        max_workers: int = 2,
    ) -> None:
        self.store = store
        self.loans_client = loans_client
        self.cards_client = cards_client
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="downstream"
        )

    def fetch_customer_details(
        self,
        mobile_number: str,
        correlation_id: str | None = None,
    ) -> CustomerDetails:
        """Return customer, account, loan and card details for a mobile number.

        Parameters
        ----------
        mobile_number : str
            Customer mobile number.
        correlation_id : str | None
            Request correlation id; generated when not supplied. The same
            value is passed to both downstream calls.

        Returns
        -------
        CustomerDetails
            Merged profile. Sections with ``available=False`` hold fallback
            values.

        Raises
        ------
        ResourceNotFoundError
            If the customer or the customer's account does not exist.
        """
        correlation_id = correlation_id or new_correlation_id()
        customer, account = load_customer_and_account(self.store, mobile_number)

        logger.debug(
            "Fetching downstream details",
            extra={"correlation_id": correlation_id, "mobile_number": mobile_number},
        )
        loan_future = self._executor.submit(
            self.loans_client.fetch_details, mobile_number, correlation_id
        )
        card_future = self._executor.submit(
            self.cards_client.fetch_details, mobile_number, correlation_id
        )
        loan = loan_future.result()
        card = card_future.result()

        details = mappers.to_customer_details(customer, account, loan, card)
        if details.degraded:
            logger.warning(
                "Customer details built with fallback values (loans=%s, cards=%s)",
                loan.available,
                card.available,
                extra={"correlation_id": correlation_id},
            )
        return details

    def close(self) -> None:
        """Shut down the downstream thread pool and close clients."""
        self._executor.shutdown(wait=True)
        for client in (self.loans_client, self.cards_client):
            close = getattr(client, "close", None)
            if close is not None:
                close()
