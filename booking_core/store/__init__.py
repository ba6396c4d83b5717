from booking_core.store.base import RecordStore, SlotConflictError, StoreError
from booking_core.store.memory import InMemoryRecordStore

__all__ = ["RecordStore", "SlotConflictError", "StoreError", "InMemoryRecordStore"]
