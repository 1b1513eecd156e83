"""Record store contract used by the orchestration services."""

from contextlib import AbstractContextManager
from typing import Protocol

from accounts_service.models import Account, Customer


class RecordStore(Protocol):
    """Persistence for customers and accounts.

    The store enforces no uniqueness; the services check invariants
    before writing. Reads after writes within one operation must see
    those writes.
    """

    def get_customer(self, customer_id: int) -> Customer | None: ...

    def find_customer_by_mobile_number(self, mobile_number: str) -> Customer | None: ...

    def save_customer(self, customer: Customer) -> Customer: ...

    def delete_customer(self, customer_id: int) -> None: ...

    def get_account(self, account_number: int) -> Account | None: ...

    def find_account_by_customer_id(self, customer_id: int) -> Account | None: ...

    def save_account(self, account: Account) -> Account: ...

    def delete_accounts_by_customer_id(self, customer_id: int) -> int: ...

    def transaction(self) -> AbstractContextManager[None]: ...
