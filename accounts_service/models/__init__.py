"""Domain models for accounts-service."""

from accounts_service.models.account import Account
from accounts_service.models.customer import Customer
from accounts_service.models.dto import (
    AccountDto,
    AccountMessage,
    CardDetails,
    CustomerDetails,
    CustomerDto,
    LoanDetails,
)
from accounts_service.models.enums import AccountType

__all__ = [
    "Account",
    "AccountDto",
    "AccountMessage",
    "AccountType",
    "CardDetails",
    "Customer",
    "CustomerDetails",
    "CustomerDto",
    "LoanDetails",
]
