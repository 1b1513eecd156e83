"""Cards service client and fallback."""

from typing import Any

from accounts_service.clients.http_client import HttpDetailsClient, to_decimal
from accounts_service.models import CardDetails


class CardsClient(HttpDetailsClient[CardDetails]):
    """HTTP client for the Cards service."""

    service_name = "cards"

    def parse(self, payload: dict[str, Any], mobile_number: str) -> CardDetails:
        return CardDetails(
            mobile_number=payload.get("mobileNumber", mobile_number),
            card_number=payload.get("cardNumber"),
            card_type=payload.get("cardType"),
            total_limit=to_decimal(payload.get("totalLimit")),
            amount_used=to_decimal(payload.get("amountUsed")),
            available_amount=to_decimal(payload.get("availableAmount")),
        )


class CardsFallback:
    """Static stand-in used when the Cards service is unavailable."""

    def fetch_details(self, mobile_number: str, correlation_id: str) -> CardDetails:
        return CardDetails(mobile_number=mobile_number, available=False)
