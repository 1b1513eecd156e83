"""Transfer objects exchanged with callers and downstream services."""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass
class AccountDto:
    """Account fields a caller may read or overwrite."""

    account_number: int | None = None
    account_type: str | None = None
    branch_address: str | None = None


@dataclass
class CustomerDto:
    """Customer fields plus the embedded account payload."""

    name: str
    email: str
    mobile_number: str
    account: AccountDto | None = None


@dataclass
class LoanDetails:
    """Loan summary returned by the Loans service.

    ``available`` is False only for the fallback value substituted when
    the Loans service could not be reached.
    """

    mobile_number: str
    loan_number: str | None = None
    loan_type: str | None = None
    total_loan: Decimal = Decimal("0")
    amount_paid: Decimal = Decimal("0")
    outstanding_amount: Decimal = Decimal("0")
    available: bool = True


@dataclass
class CardDetails:
    """Card summary returned by the Cards service.

    ``available`` is False only for the fallback value substituted when
    the Cards service could not be reached.
    """

    mobile_number: str
    card_number: str | None = None
    card_type: str | None = None
    total_limit: Decimal = Decimal("0")
    amount_used: Decimal = Decimal("0")
    available_amount: Decimal = Decimal("0")
    available: bool = True


@dataclass
class CustomerDetails:
    """Full customer profile. Built per request, never stored."""

    name: str
    email: str
    mobile_number: str
    account: AccountDto = field(default_factory=AccountDto)
    loan: LoanDetails | None = None
    card: CardDetails | None = None

    @property
    def degraded(self) -> bool:
        """True when any downstream section holds a fallback value."""
        return any(
            section is not None and not section.available
            for section in (self.loan, self.card)
        )


@dataclass
class AccountMessage:
    """Notification payload sent to the communication subsystem."""

    account_number: int
    name: str
    email: str
    mobile_number: str
