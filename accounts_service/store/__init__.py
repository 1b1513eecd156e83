"""Record stores for customer and account entities."""

from accounts_service.store.base import RecordStore
from accounts_service.store.memory import InMemoryRecordStore

__all__ = ["InMemoryRecordStore", "RecordStore"]
