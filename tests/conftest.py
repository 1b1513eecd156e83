"""Pytest configuration and fixtures."""

from decimal import Decimal

import pytest

from accounts_service.generators import SequentialAccountNumberGenerator
from accounts_service.models import CardDetails, CustomerDto, LoanDetails
from accounts_service.services import AccountsService
from accounts_service.store import InMemoryRecordStore
from fakes import RecordingPublisher


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def sample_mobile_number() -> str:
    """Sample mobile number."""
    return "9876543210"


@pytest.fixture
def store() -> InMemoryRecordStore:
    """Create a fresh store for each test."""
    return InMemoryRecordStore()


@pytest.fixture
def publisher() -> RecordingPublisher:
    """In-memory event publisher."""
    return RecordingPublisher()


@pytest.fixture
def accounts_service(store: InMemoryRecordStore, publisher: RecordingPublisher) -> AccountsService:
    """Accounts service with a deterministic account number generator."""
    return AccountsService(
        store=store,
        publisher=publisher,
        account_number_generator=SequentialAccountNumberGenerator(),
    )


@pytest.fixture
def customer_dto(sample_mobile_number: str) -> CustomerDto:
    """Valid customer payload without an account section."""
    return CustomerDto(name="Alice", email="a@x.com", mobile_number=sample_mobile_number)


@pytest.fixture
def loan_details(sample_mobile_number: str) -> LoanDetails:
    """Genuine loan summary."""
    return LoanDetails(
        mobile_number=sample_mobile_number,
        loan_number="548732457654",
        loan_type="Home Loan",
        total_loan=Decimal("100000"),
        amount_paid=Decimal("25000"),
        outstanding_amount=Decimal("75000"),
    )


@pytest.fixture
def card_details(sample_mobile_number: str) -> CardDetails:
    """Genuine card summary."""
    return CardDetails(
        mobile_number=sample_mobile_number,
        card_number="100646930341",
        card_type="Credit Card",
        total_limit=Decimal("100000"),
        amount_used=Decimal("1000"),
        available_amount=Decimal("99000"),
    )
