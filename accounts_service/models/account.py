"""Account model."""

from dataclasses import dataclass
from datetime import datetime

from accounts_service.models.enums import AccountType


@dataclass
class Account:
    """Bank account entity.

    ``account_number`` is the primary key and never changes once assigned.
    """

    account_number: int
    customer_id: int
    account_type: AccountType
    branch_address: str
    communication_sent: bool = False
    created_at: datetime | None = None
    created_by: str | None = None
    updated_at: datetime | None = None
    updated_by: str | None = None
