"""Customer model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Customer:
    """Bank customer entity.

    ``customer_id`` is assigned by the record store on first save.
    ``mobile_number`` is the secondary unique key.
    """

    name: str
    email: str
    mobile_number: str
    customer_id: int | None = None
    created_at: datetime | None = None
    created_by: str | None = None
    updated_at: datetime | None = None
    updated_by: str | None = None
