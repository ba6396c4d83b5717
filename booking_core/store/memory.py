"""
In-process record store.

Backs the console demo and the test suite. Every operation yields to the
event loop before touching data (optionally after a simulated latency),
so concurrent workflows interleave the way they would against a remote
store.
"""

import asyncio
import copy
import logging
import uuid
from typing import Any, Optional

from booking_core.store.base import RecordStore, SlotConflictError, StoreError

logger = logging.getLogger(__name__)


class InMemoryRecordStore(RecordStore):
    """Dict-of-dicts store with failure injection for tests."""

    def __init__(self, latency_sec: float = 0.0) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self._latency_sec = latency_sec
        self._failing: set[str] = set()

    def fail_operations(self, *operations: str) -> None:
        """Make the named operations ("insert", "list_all", "delete_by_id") raise StoreError."""
        self._failing.update(operations)

    def restore(self) -> None:
        self._failing.clear()

    async def _enter(self, operation: str, collection: str) -> dict[str, dict[str, Any]]:
        await asyncio.sleep(self._latency_sec)
        if operation in self._failing:
            raise StoreError(f"{operation} on '{collection}' failed: store unavailable")
        return self._collections.setdefault(collection, {})

    async def insert(
        self, collection: str, record: dict[str, Any], key: Optional[str] = None
    ) -> str:
        docs = await self._enter("insert", collection)
        if key is not None and key in docs:
            raise SlotConflictError(collection, key)
        record_id = key or uuid.uuid4().hex[:20]
        docs[record_id] = copy.deepcopy(record)
        logger.debug("Inserted %s/%s", collection, record_id)
        return record_id

    async def list_all(self, collection: str) -> list[dict[str, Any]]:
        docs = await self._enter("list_all", collection)
        return [{"id": record_id, **copy.deepcopy(data)} for record_id, data in docs.items()]

    async def delete_by_id(self, collection: str, record_id: str) -> None:
        docs = await self._enter("delete_by_id", collection)
        if docs.pop(record_id, None) is None:
            logger.debug("Delete of missing %s/%s ignored", collection, record_id)

    def count(self, collection: str) -> int:
        return len(self._collections.get(collection, {}))

    def reset(self) -> None:
        """Clear all collections. Used by test fixtures for isolation."""
        self._collections.clear()
        self._failing.clear()
