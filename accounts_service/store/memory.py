"""In-memory record store with secondary indexes and rollback."""

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from datetime import datetime

from accounts_service.exceptions import ReferentialIntegrityError
from accounts_service.models import Account, Customer


@dataclass
class InMemoryRecordStore:
    """In-memory store for customers and accounts with relationship tracking.

    Entities are copied on the way in and out, so a caller only changes
    stored state through ``save_*``. ``transaction()`` restores the state
    captured on entry when its block raises.
    """

    # Primary entities
    customers: dict[int, Customer] = field(default_factory=dict)
    accounts: dict[int, Account] = field(default_factory=dict)

    # Relationship indexes
    _mobile_index: dict[str, int] = field(default_factory=dict)
    _customer_accounts: dict[int, list[int]] = field(default_factory=dict)

    _next_customer_id: int = 1
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _tx_depth: int = 0

    # Customers
    def get_customer(self, customer_id: int) -> Customer | None:
        """Get a customer by id."""
        with self._lock:
            customer = self.customers.get(customer_id)
            return replace(customer) if customer is not None else None

    def find_customer_by_mobile_number(self, mobile_number: str) -> Customer | None:
        """Get a customer by mobile number."""
        with self._lock:
            customer_id = self._mobile_index.get(mobile_number)
            if customer_id is None:
                return None
            return replace(self.customers[customer_id])

    def save_customer(self, customer: Customer) -> Customer:
        """Insert or update a customer, assigning an id on first save."""
        with self._lock:
            stored = replace(customer)
            now = datetime.now()
            if stored.customer_id is None:
                stored.customer_id = self._next_customer_id
                self._next_customer_id += 1
            previous = self.customers.get(stored.customer_id)
            if previous is None:
                stored.created_at = stored.created_at or now
                self._customer_accounts.setdefault(stored.customer_id, [])
            else:
                stored.updated_at = now
                if self._mobile_index.get(previous.mobile_number) == stored.customer_id:
                    del self._mobile_index[previous.mobile_number]

            self.customers[stored.customer_id] = stored
            self._mobile_index[stored.mobile_number] = stored.customer_id
            return replace(stored)

    def delete_customer(self, customer_id: int) -> None:
        """Delete a customer by id. Missing ids are ignored."""
        with self._lock:
            customer = self.customers.pop(customer_id, None)
            if customer is None:
                return
            if self._mobile_index.get(customer.mobile_number) == customer_id:
                del self._mobile_index[customer.mobile_number]
            self._customer_accounts.pop(customer_id, None)

    # Accounts
    def get_account(self, account_number: int) -> Account | None:
        """Get an account by account number."""
        with self._lock:
            account = self.accounts.get(account_number)
            return replace(account) if account is not None else None

    def find_account_by_customer_id(self, customer_id: int) -> Account | None:
        """Get the first account owned by a customer."""
        with self._lock:
            numbers = self._customer_accounts.get(customer_id, [])
            if not numbers:
                return None
            return replace(self.accounts[numbers[0]])

    def get_customer_accounts(self, customer_id: int) -> list[Account]:
        """Get all accounts for a customer."""
        with self._lock:
            numbers = self._customer_accounts.get(customer_id, [])
            return [replace(self.accounts[n]) for n in numbers]

    def save_account(self, account: Account) -> Account:
        """Insert or update an account."""
        with self._lock:
            if account.customer_id not in self.customers:
                raise ReferentialIntegrityError("Customer", "customerId", account.customer_id)

            stored = replace(account)
            previous = self.accounts.get(stored.account_number)
            if previous is None:
                stored.created_at = stored.created_at or datetime.now()
                self._customer_accounts[stored.customer_id].append(stored.account_number)
            else:
                stored.updated_at = datetime.now()
                if previous.customer_id != stored.customer_id:
                    self._customer_accounts[previous.customer_id].remove(stored.account_number)
                    self._customer_accounts[stored.customer_id].append(stored.account_number)

            self.accounts[stored.account_number] = stored
            return replace(stored)

    def delete_accounts_by_customer_id(self, customer_id: int) -> int:
        """Delete every account owned by a customer.

        Returns
        -------
        int
            Number of accounts deleted.
        """
        with self._lock:
            numbers = self._customer_accounts.get(customer_id, [])
            for number in numbers:
                del self.accounts[number]
            if customer_id in self._customer_accounts:
                self._customer_accounts[customer_id] = []
            return len(numbers)

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Run a block atomically with respect to this store.

        Nested blocks join the outermost one. The lock is held for the
        whole block so concurrent writers never see a partial state.
        """
        with self._lock:
            if self._tx_depth:
                self._tx_depth += 1
                try:
                    yield
                finally:
                    self._tx_depth -= 1
                return

            snapshot = self._snapshot()
            self._tx_depth = 1
            try:
                yield
            except BaseException:
                self._restore(snapshot)
                raise
            finally:
                self._tx_depth = 0

    def _snapshot(self) -> tuple:
        return (
            dict(self.customers),
            dict(self.accounts),
            dict(self._mobile_index),
            {cid: list(numbers) for cid, numbers in self._customer_accounts.items()},
            self._next_customer_id,
        )

    def _restore(self, snapshot: tuple) -> None:
        (
            self.customers,
            self.accounts,
            self._mobile_index,
            self._customer_accounts,
            self._next_customer_id,
        ) = snapshot

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        with self._lock:
            return {
                "customers": len(self.customers),
                "accounts": len(self.accounts),
            }
