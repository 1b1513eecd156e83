"""Orchestration services for accounts and customer profiles."""

from accounts_service.services.accounts import AccountsService, load_customer_and_account
from accounts_service.services.customers import CustomersService, new_correlation_id

__all__ = [
    "AccountsService",
    "CustomersService",
    "load_customer_and_account",
    "new_correlation_id",
]
