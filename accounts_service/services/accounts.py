"""Account lifecycle operations."""

import logging

from accounts_service import mappers
from accounts_service.config import DEFAULT_BRANCH_ADDRESS, TopicConfig
from accounts_service.events.base import EventPublisher
from accounts_service.exceptions import (
    ConfigurationError,
    CustomerAlreadyExistsError,
    PublishError,
    ResourceNotFoundError,
)
from accounts_service.generators.account_number import (
    AccountNumberGenerator,
    RandomAccountNumberGenerator,
)
from accounts_service.models import Account, AccountMessage, AccountType, Customer, CustomerDto
from accounts_service.store.base import RecordStore
from accounts_service.validation import (
    validate_account,
    validate_customer,
    validate_mobile_number,
)

logger = logging.getLogger(__name__)

DEFAULT_ACCOUNT_TYPE = AccountType.SAVINGS
MAX_ACCOUNT_NUMBER_ATTEMPTS = 10


def load_customer_and_account(store: RecordStore, mobile_number: str) -> tuple[Customer, Account]:
    """Look up a customer by mobile number and the account they own.

    Raises
    ------
    ValidationError
        If the mobile number is malformed.
    ResourceNotFoundError
        If either record is missing.
    """
    validate_mobile_number(mobile_number)
    customer = store.find_customer_by_mobile_number(mobile_number)
    if customer is None:
        raise ResourceNotFoundError("Customer", "mobileNumber", mobile_number)

    account = store.find_account_by_customer_id(customer.customer_id)
    if account is None:
        raise ResourceNotFoundError("Account", "customerId", customer.customer_id)
    return customer, account


class AccountsService:
    """Create, read, update and delete customer accounts.

    Holds no per-request state; every call goes to the record store.

    Parameters
    ----------
    store : RecordStore
        Persistence for customers and accounts.
    publisher : EventPublisher
        Channel for the post-creation communication event.
    account_number_generator : AccountNumberGenerator | None
        Source of new account numbers (default: bounded random).
    topics : TopicConfig | None
        Topic names (default ``send-communication``).
    branch_address : str
        Branch address stamped on new accounts.
    actor : str
        Value written to ``created_by`` / ``updated_by``.
    """

    def __init__(
        self,
        store: RecordStore,
        publisher: EventPublisher,
        account_number_generator: AccountNumberGenerator | None = None,
        topics: TopicConfig | None = None,
        branch_address: str = DEFAULT_BRANCH_ADDRESS,
        actor: str = "ACCOUNTS_MS",
    ) -> None:
        self.store = store
        self.publisher = publisher
        self.account_number_generator = account_number_generator or RandomAccountNumberGenerator()
        self.topics = topics or TopicConfig()
        self.branch_address = branch_address
        self.actor = actor

    def create_account(self, customer_dto: CustomerDto) -> Account:
        """Register a customer and open a default account for them.

        Parameters
        ----------
        customer_dto : CustomerDto
            Customer name, email and mobile number.

        Returns
        -------
        Account
            The newly opened account.

        Raises
        ------
        ValidationError
            If the customer fields are malformed.
        CustomerAlreadyExistsError
            If the mobile number is already registered. Nothing is written.
        """
        validate_customer(customer_dto)

        with self.store.transaction():
            if self.store.find_customer_by_mobile_number(customer_dto.mobile_number) is not None:
                raise CustomerAlreadyExistsError(customer_dto.mobile_number)

            customer = mappers.to_customer(customer_dto)
            customer.created_by = self.actor
            saved_customer = self.store.save_customer(customer)
            saved_account = self.store.save_account(self._new_account(saved_customer))

        logger.info(
            "Account created",
            extra={
                "account_number": saved_account.account_number,
                "customer_id": saved_customer.customer_id,
            },
        )
        self._send_communication(saved_account, saved_customer)
        return saved_account

    def _new_account(self, customer: Customer) -> Account:
        if customer.customer_id is None:
            raise ValueError("Customer must be saved before opening an account")
        return Account(
            account_number=self._next_account_number(),
            customer_id=customer.customer_id,
            account_type=DEFAULT_ACCOUNT_TYPE,
            branch_address=self.branch_address,
            created_by=self.actor,
        )

    def _next_account_number(self) -> int:
        for _ in range(MAX_ACCOUNT_NUMBER_ATTEMPTS):
            number = self.account_number_generator.next_number()
            if self.store.get_account(number) is None:
                return number
            logger.debug("Account number collision", extra={"account_number": number})
        raise ConfigurationError(
            f"No free account number after {MAX_ACCOUNT_NUMBER_ATTEMPTS} attempts"
        )

    def _send_communication(self, account: Account, customer: Customer) -> None:
        message = AccountMessage(
            account_number=account.account_number,
            name=customer.name,
            email=customer.email,
            mobile_number=customer.mobile_number,
        )
        logger.info("Sending communication request for the details: %s", message)
        try:
            self.publisher.publish(
                self.topics.send_communication, message, key=str(account.account_number)
            )
        except Exception as e:
            # The account is already committed; the event is best effort.
            logger.error(
                "Communication request failed: %s",
                e,
                exc_info=not isinstance(e, PublishError),
                extra={"account_number": account.account_number},
            )
            return
        logger.info(
            "Communication request triggered",
            extra={"account_number": account.account_number},
        )

    def fetch_account(self, mobile_number: str) -> CustomerDto:
        """Return the customer and account registered for a mobile number.

        Raises
        ------
        ResourceNotFoundError
            If the customer, or the customer's account, does not exist.
        """
        customer, account = load_customer_and_account(self.store, mobile_number)
        return mappers.to_customer_dto(customer, account)

    def update_account(self, customer_dto: CustomerDto) -> bool:
        """Overwrite an account and its owning customer from a DTO.

        Returns
        -------
        bool
            False when the DTO carries no account payload (nothing is
            written), True once both records are saved.

        Raises
        ------
        ResourceNotFoundError
            If the account or its customer does not exist. No write is kept.
        """
        account_dto = customer_dto.account
        if account_dto is None:
            return False

        validate_account(account_dto)
        validate_customer(customer_dto)

        with self.store.transaction():
            account = self.store.get_account(account_dto.account_number)
            if account is None:
                raise ResourceNotFoundError("Account", "accountNumber", account_dto.account_number)

            mappers.apply_account_dto(account_dto, account)
            account.updated_by = self.actor
            account = self.store.save_account(account)

            customer = self.store.get_customer(account.customer_id)
            if customer is None:
                raise ResourceNotFoundError("Customer", "customerId", account.customer_id)

            owner = self.store.find_customer_by_mobile_number(customer_dto.mobile_number)
            if owner is not None and owner.customer_id != customer.customer_id:
                raise CustomerAlreadyExistsError(customer_dto.mobile_number)

            mappers.to_customer(customer_dto, customer)
            customer.updated_by = self.actor
            self.store.save_customer(customer)

        return True

    def delete_account(self, mobile_number: str) -> bool:
        """Delete a customer and every account they own.

        Raises
        ------
        ResourceNotFoundError
            If no customer is registered for the mobile number.
        """
        validate_mobile_number(mobile_number)

        with self.store.transaction():
            customer = self.store.find_customer_by_mobile_number(mobile_number)
            if customer is None:
                raise ResourceNotFoundError("Customer", "mobileNumber", mobile_number)

            deleted = self.store.delete_accounts_by_customer_id(customer.customer_id)
            self.store.delete_customer(customer.customer_id)

        logger.info(
            "Deleted customer and %d account(s)",
            deleted,
            extra={"customer_id": customer.customer_id},
        )
        return True

    def update_communication_status(self, account_number: int | None) -> bool:
        """Mark that the creation communication was sent for an account.

        Idempotent: marking an already-marked account succeeds again.

        Returns
        -------
        bool
            False when no account number is given, True otherwise.

        Raises
        ------
        ResourceNotFoundError
            If the account does not exist.
        """
        if account_number is None:
            return False

        account = self.store.get_account(account_number)
        if account is None:
            raise ResourceNotFoundError("Account", "accountNumber", account_number)

        if not account.communication_sent:
            account.communication_sent = True
            account.updated_by = self.actor
            self.store.save_account(account)
        return True
