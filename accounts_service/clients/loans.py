"""Loans service client and fallback."""

from typing import Any

from accounts_service.clients.http_client import HttpDetailsClient, to_decimal
from accounts_service.models import LoanDetails


class LoansClient(HttpDetailsClient[LoanDetails]):
    """HTTP client for the Loans service."""

    service_name = "loans"

    def parse(self, payload: dict[str, Any], mobile_number: str) -> LoanDetails:
        return LoanDetails(
            mobile_number=payload.get("mobileNumber", mobile_number),
            loan_number=payload.get("loanNumber"),
            loan_type=payload.get("loanType"),
            total_loan=to_decimal(payload.get("totalLoan")),
            amount_paid=to_decimal(payload.get("amountPaid")),
            outstanding_amount=to_decimal(payload.get("outstandingAmount")),
        )


class LoansFallback:
    """Static stand-in used when the Loans service is unavailable."""

    def fetch_details(self, mobile_number: str, correlation_id: str) -> LoanDetails:
        return LoanDetails(mobile_number=mobile_number, available=False)
