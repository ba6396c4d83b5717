"""Record store interface shared by the in-memory and Firestore backends."""

from abc import ABC, abstractmethod
from typing import Any, Optional


class StoreError(Exception):
    """Connectivity or permission failure while reading or writing records."""


class SlotConflictError(StoreError):
    """A keyed insert found a record already holding that key."""

    def __init__(self, collection: str, key: str) -> None:
        self.collection = collection
        self.key = key
        super().__init__(f"Record {key!r} already exists in '{collection}'")


class RecordStore(ABC):
    """
    Minimal document-store contract: insert, list everything, delete by id.

    Only per-document atomicity is assumed. Nothing spans a read followed
    by a write, so a check-then-insert sequence can race with another
    writer unless the insert is keyed.
    """

    @abstractmethod
    async def insert(
        self, collection: str, record: dict[str, Any], key: Optional[str] = None
    ) -> str:
        """Append a record and return its id.

        With ``key`` the record is created under that id atomically, and
        ``SlotConflictError`` is raised when the id is already present.
        """

    @abstractmethod
    async def list_all(self, collection: str) -> list[dict[str, Any]]:
        """Every record in the collection, each with its ``id``."""

    @abstractmethod
    async def delete_by_id(self, collection: str, record_id: str) -> None:
        """Remove a record. Missing ids are a no-op."""
