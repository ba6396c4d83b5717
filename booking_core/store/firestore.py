"""
Firestore-backed record store.

Uses the async Firestore client from the Firebase Admin SDK. Credentials
come from FIREBASE_CREDENTIALS_PATH (service account JSON) or, when unset,
Application Default Credentials.
"""

import logging
from typing import Any, Optional

import firebase_admin
from firebase_admin import credentials, firestore_async
from google.api_core import exceptions as google_exceptions

from booking_core.config import FirebaseConfig, settings
from booking_core.store.base import RecordStore, SlotConflictError, StoreError

logger = logging.getLogger(__name__)


def get_firebase_app(config: Optional[FirebaseConfig] = None) -> firebase_admin.App:
    """Return the default Firebase app, initializing it once."""
    config = config or settings.firebase
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    options = {"projectId": config.project_id} if config.project_id else None
    if config.credentials_path:
        cred = credentials.Certificate(config.credentials_path)
        logger.info("Firebase Admin initialized from service account file")
    else:
        cred = credentials.ApplicationDefault()
        logger.info("Firebase Admin initialized with default credentials")
    return firebase_admin.initialize_app(cred, options)


class FirestoreRecordStore(RecordStore):
    """Record store over Firestore collections."""

    def __init__(self, client: Any = None) -> None:
        self._client = client if client is not None else firestore_async.client(get_firebase_app())

    async def insert(
        self, collection: str, record: dict[str, Any], key: Optional[str] = None
    ) -> str:
        try:
            if key is not None:
                # create() fails if the document exists, unlike set()
                await self._client.collection(collection).document(key).create(record)
                return key
            _, doc_ref = await self._client.collection(collection).add(record)
            return doc_ref.id
        except google_exceptions.Conflict as exc:
            raise SlotConflictError(collection, key or "") from exc
        except google_exceptions.GoogleAPICallError as exc:
            raise StoreError(f"insert into '{collection}' failed: {exc}") from exc

    async def list_all(self, collection: str) -> list[dict[str, Any]]:
        try:
            return [
                {"id": snapshot.id, **(snapshot.to_dict() or {})}
                async for snapshot in self._client.collection(collection).stream()
            ]
        except google_exceptions.GoogleAPICallError as exc:
            raise StoreError(f"listing '{collection}' failed: {exc}") from exc

    async def delete_by_id(self, collection: str, record_id: str) -> None:
        try:
            await self._client.collection(collection).document(record_id).delete()
        except google_exceptions.NotFound:
            logger.debug("Delete of missing %s/%s ignored", collection, record_id)
        except google_exceptions.GoogleAPICallError as exc:
            raise StoreError(f"delete from '{collection}' failed: {exc}") from exc
