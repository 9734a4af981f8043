"""
Firebase service for Firestore document operations
"""

from __future__ import annotations
import asyncio
import json
import logging
import os
from typing import Optional, Dict, Any, List

import firebase_admin
from firebase_admin import credentials, firestore

from lawconsult.config import settings

logger = logging.getLogger(__name__)


def _split_path(path: str) -> tuple[str, str]:
    """Split ``collection/doc_id`` into its two parts."""
    collection, _, doc_id = path.partition("/")
    if not collection or not doc_id:
        raise ValueError(f"Invalid document path: {path!r}")
    return collection, doc_id


class FirebaseService:
    """Service for Firestore operations"""

    _instance = None

    def __new__(cls):
        """Singleton pattern to ensure only one Firebase instance"""
        if cls._instance is None:
            cls._instance = super(FirebaseService, cls).__new__(cls)
            cls._instance._db = None
        return cls._instance

    @property
    def db(self):
        """Firestore client, created on first use."""
        if self._db is None:
            self._initialize_firebase()
            self._db = firestore.client()
        return self._db

    @db.setter
    def db(self, client):
        self._db = client

    def _initialize_firebase(self):
        """Initialize Firebase Admin SDK with credentials"""
        try:
            firebase_admin.get_app()
            logger.info("Firebase already initialized")
            return
        except ValueError:
            pass

        try:
            if settings.DEV_MODE and settings.FIREBASE_EMULATOR_HOST:
                os.environ["FIRESTORE_EMULATOR_HOST"] = settings.FIREBASE_EMULATOR_HOST
                firebase_admin.initialize_app()
                logger.info(
                    "Firebase initialized with emulator: %s", settings.FIREBASE_EMULATOR_HOST)
                return

            if settings.FIREBASE_CREDENTIALS_JSON:
                cred = credentials.Certificate(
                    json.loads(settings.FIREBASE_CREDENTIALS_JSON))
                logger.info(
                    "Firebase initialized with credentials from FIREBASE_CREDENTIALS_JSON")
            else:
                cred = credentials.Certificate(
                    settings.FIREBASE_CREDENTIALS_PATH)
                logger.info("Firebase initialized with credentials from %s",
                            settings.FIREBASE_CREDENTIALS_PATH)
            firebase_admin.initialize_app(cred)
        except Exception as e:
            logger.error("Firebase Admin SDK initialization failed: %s", e)
            raise

    # ============================================
    # DOCUMENT OPERATIONS
    # ============================================

    async def get_document(self, path: str) -> Optional[Dict[str, Any]]:
        """
        Fetch one document

        Args:
            path: ``collection/doc_id``

        Returns:
            Document data, or None when the document does not exist
        """
        collection, doc_id = _split_path(path)
        ref = self.db.collection(collection).document(doc_id)
        doc = await asyncio.to_thread(ref.get)
        if not doc.exists:
            return None
        return doc.to_dict()

    async def set_document(self, path: str, data: Dict[str, Any]) -> None:
        collection, doc_id = _split_path(path)
        ref = self.db.collection(collection).document(doc_id)
        await asyncio.to_thread(ref.set, data)

    async def update_document(self, path: str, data: Dict[str, Any]) -> None:
        collection, doc_id = _split_path(path)
        ref = self.db.collection(collection).document(doc_id)
        await asyncio.to_thread(ref.update, data)

    # ============================================
    # GENERIC QUERY OPERATIONS
    # ============================================

    async def stream_collection(self, collection_name: str) -> List[tuple[str, Dict[str, Any]]]:
        """Return every document of a collection as ``(doc_id, data)`` pairs."""

        def _stream():
            return [(doc.id, doc.to_dict()) for doc in self.db.collection(collection_name).stream()]

        return await asyncio.to_thread(_stream)

    async def count_collection(self, collection_name: str) -> int:
        docs = await self.stream_collection(collection_name)
        return len(docs)

    async def query_collection(
        self,
        collection_name: str,
        filters: Optional[List[tuple] | Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        direction: str = "ASCENDING",
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        get_total_count: bool = False,
    ) -> tuple[List[tuple[str, Dict[str, Any]]], int]:
        """
        Queries a Firestore collection with filters, ordering, and pagination.

        Args:
            collection_name: The name of the Firestore collection.
            filters: A list of ``(field, op, value)`` tuples, or a dict of
                     ``{field: value}`` which defaults to ``==`` comparison.
            order_by: The field to order the results by.
            direction: ``ASCENDING`` or ``DESCENDING``.
            limit: The maximum number of documents to return.
            offset: The number of documents to skip.
            get_total_count: If True, also count all documents matching the
                     filters (without limit/offset).

        Returns:
            A tuple of the ``(doc_id, data)`` list and the total count
            (0 when ``get_total_count`` is False).
        """
        query = self.db.collection(collection_name)

        if filters:
            if isinstance(filters, dict):
                filters = [(k, "==", v) for k, v in filters.items()]
            for f in filters:
                if len(f) != 3:
                    raise ValueError(
                        f"Invalid filter format: {f}. Expected (field, op, value)")
                query = query.where(f[0], f[1], f[2])

        def _get_stream_data(q):
            return [(doc.id, doc.to_dict()) for doc in q.stream()]

        total_count = 0
        if get_total_count:
            total_count = len(await asyncio.to_thread(_get_stream_data, query))

        if order_by:
            query = query.order_by(order_by, direction=direction)
        if offset:
            query = query.offset(offset)
        if limit:
            query = query.limit(limit)

        docs = await asyncio.to_thread(_get_stream_data, query)
        return docs, total_count


# Global Firebase service instance
firebase_service = FirebaseService()
