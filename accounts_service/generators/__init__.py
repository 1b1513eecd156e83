"""Generators for account numbers and demo customers."""

from accounts_service.generators.account_number import (
    AccountNumberGenerator,
    RandomAccountNumberGenerator,
    SequentialAccountNumberGenerator,
)
from accounts_service.generators.customer import CustomerGenerator

__all__ = [
    "AccountNumberGenerator",
    "CustomerGenerator",
    "RandomAccountNumberGenerator",
    "SequentialAccountNumberGenerator",
]
