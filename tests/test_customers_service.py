"""Tests for customer profile aggregation."""

import threading

import httpx
import pytest

from accounts_service.clients import (
    CORRELATION_ID_HEADER,
    CardsFallback,
    LoansFallback,
    ResilientDetailsClient,
    build_cards_client,
    build_loans_client,
)
from accounts_service.config import DownstreamConfig
from accounts_service.exceptions import DownstreamUnavailableError, ResourceNotFoundError
from accounts_service.services import CustomersService, new_correlation_id
from fakes import StubDetailsClient


class FailingDetailsClient:
    """Primary client that is always unavailable."""

    def __init__(self) -> None:
        self.calls = 0

    def fetch_details(self, mobile_number: str, correlation_id: str):
        self.calls += 1
        raise DownstreamUnavailableError("connection refused")


@pytest.fixture
def created(accounts_service, customer_dto):
    """Store holding the example customer and its account."""
    return accounts_service.create_account(customer_dto)


class TestFetchCustomerDetails:
    """Tests for fetch_customer_details."""

    def test_merges_all_sections(self, store, created, loan_details, card_details, sample_mobile_number) -> None:
        """Both downstream sections are merged with the stored records."""
        service = CustomersService(store, StubDetailsClient(loan_details), StubDetailsClient(card_details))
        try:
            details = service.fetch_customer_details(sample_mobile_number, "corr-1")
        finally:
            service.close()

        assert details.name == "Alice"
        assert details.email == "a@x.com"
        assert details.mobile_number == sample_mobile_number
        assert details.account.account_number == created.account_number
        assert details.loan == loan_details
        assert details.card == card_details
        assert details.degraded is False

    def test_same_correlation_id_reaches_both(self, store, created, loan_details, card_details, sample_mobile_number) -> None:
        """The supplied correlation id is forwarded unchanged to both clients."""
        loans = StubDetailsClient(loan_details)
        cards = StubDetailsClient(card_details)
        service = CustomersService(store, loans, cards)
        try:
            service.fetch_customer_details(sample_mobile_number, "abc123")
        finally:
            service.close()

        assert loans.calls == [(sample_mobile_number, "abc123")]
        assert cards.calls == [(sample_mobile_number, "abc123")]

    def test_generates_correlation_id(self, store, created, loan_details, card_details, sample_mobile_number) -> None:
        """A correlation id is generated when none is supplied."""
        loans = StubDetailsClient(loan_details)
        cards = StubDetailsClient(card_details)
        service = CustomersService(store, loans, cards)
        try:
            service.fetch_customer_details(sample_mobile_number)
        finally:
            service.close()

        generated = loans.calls[0][1]
        assert generated
        assert cards.calls[0][1] == generated

    def test_loans_failure_uses_fallback(self, store, created, card_details, sample_mobile_number) -> None:
        """A failing Loans service yields the loan fallback and real card data."""
        primary = FailingDetailsClient()
        loans = ResilientDetailsClient(primary, LoansFallback())
        service = CustomersService(store, loans, StubDetailsClient(card_details))
        try:
            details = service.fetch_customer_details(sample_mobile_number, "corr")
        finally:
            service.close()

        assert primary.calls == 1
        assert details.loan.available is False
        assert details.loan.mobile_number == sample_mobile_number
        assert details.card == card_details
        assert details.degraded is True

    def test_both_failing_still_returns_profile(self, store, created, sample_mobile_number) -> None:
        """When both services fail the profile carries both fallbacks."""
        service = CustomersService(
            store,
            ResilientDetailsClient(FailingDetailsClient(), LoansFallback()),
            ResilientDetailsClient(FailingDetailsClient(), CardsFallback()),
        )
        try:
            details = service.fetch_customer_details(sample_mobile_number, "corr")
        finally:
            service.close()

        assert details.account.account_number == created.account_number
        assert details.loan.available is False
        assert details.card.available is False

    def test_calls_run_concurrently(self, store, created, loan_details, card_details, sample_mobile_number) -> None:
        """Both downstream calls are in flight at the same time."""
        barrier = threading.Barrier(2, timeout=5)

        class BarrierClient(StubDetailsClient):
            def fetch_details(self, mobile_number, correlation_id):
                barrier.wait()
                return super().fetch_details(mobile_number, correlation_id)

        service = CustomersService(store, BarrierClient(loan_details), BarrierClient(card_details))
        try:
            details = service.fetch_customer_details(sample_mobile_number, "corr")
        finally:
            service.close()
        assert details.degraded is False

    def test_unknown_customer(self, store, loan_details, card_details) -> None:
        """An unknown mobile number raises NotFound without downstream calls."""
        loans = StubDetailsClient(loan_details)
        service = CustomersService(store, loans, StubDetailsClient(card_details))
        try:
            with pytest.raises(ResourceNotFoundError) as exc_info:
                service.fetch_customer_details("9123456789")
        finally:
            service.close()
        assert exc_info.value.resource == "Customer"
        assert loans.calls == []


class TestWithHttpClients:
    """End-to-end through the httpx clients and a mock transport."""

    def test_http_profile_with_cards_down(self, store, created, sample_mobile_number) -> None:
        """Loans answers over HTTP, Cards returns 503 and falls back."""
        seen_headers = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen_headers.append(request.headers.get(CORRELATION_ID_HEADER))
            if request.url.host == "loans":
                return httpx.Response(
                    200,
                    json={
                        "mobileNumber": sample_mobile_number,
                        "loanNumber": "548732457654",
                        "loanType": "Home Loan",
                        "totalLoan": 100000,
                        "amountPaid": 0,
                        "outstandingAmount": 100000,
                    },
                )
            return httpx.Response(503)

        transport = httpx.MockTransport(handler)
        config = DownstreamConfig()
        service = CustomersService(
            store,
            build_loans_client(config, transport=transport),
            build_cards_client(config, transport=transport),
        )
        try:
            details = service.fetch_customer_details(sample_mobile_number, "trace-42")
        finally:
            service.close()

        assert details.loan.available is True
        assert details.loan.loan_number == "548732457654"
        assert details.card.available is False
        assert seen_headers == ["trace-42", "trace-42"]


class TestCorrelationId:
    """Tests for new_correlation_id."""

    def test_unique(self) -> None:
        """Generated ids differ."""
        assert new_correlation_id() != new_correlation_id()


class TestClosedHttpClient:
    """Tests for profiles built after the HTTP clients were closed."""

    def test_closed_clients_degrade_instead_of_raising(self, store, created, sample_mobile_number) -> None:
        """Test a closed httpx client yields fallbacks, not an exception."""
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={}))
        config = DownstreamConfig()
        loans = build_loans_client(config, transport=transport)
        cards = build_cards_client(config, transport=transport)
        loans.close()
        cards.close()

        service = CustomersService(store, loans, cards)
        try:
            details = service.fetch_customer_details(sample_mobile_number, "corr")
        finally:
            service.close()

        assert details.loan.available is False
        assert details.card.available is False
        assert details.degraded is True
