"""
Business logic for customer and product records.

``RecordService`` inserts records under a pre-allocated id and exposes
the list, search and delete pass-throughs the API needs.  Every call
is a fresh round trip to the store; nothing is cached between
requests.  Statements are built from the collection registry, so the
same code serves both collections.
"""

import logging
from typing import Any, List, Mapping, Optional

from ..core.db import RecordStore, Row
from ..core.errors import InsertionError, RecordNotFoundError, StoreError
from ..schemas.collections import get_collection
from .id_allocator import IdAllocator

logger = logging.getLogger(__name__)


class RecordService:
    """Service for inserting, listing, searching and deleting records."""

    def __init__(self, store: RecordStore) -> None:
        self.store = store
        self.allocator = IdAllocator(store)

    async def insert(self, collection_name: str, record_id: int, record: Mapping[str, Any]) -> int:
        """Insert ``record`` under ``record_id`` and return the id.

        Values are bound positionally in the order the collection
        declares its fields; fields missing from ``record`` are stored as
        ``NULL``.  The id is never generated here.

        Raises
        ------
        InsertionError
            If the store rejects the row, including a duplicate id.
        """
        collection = get_collection(collection_name)
        columns = ("id",) + collection.field_names
        placeholders = ", ".join("?" for _ in columns)
        values = [record_id] + [record.get(name) for name in collection.field_names]
        try:
            await self.store.run(
                f"INSERT INTO {collection.table} ({', '.join(columns)}) VALUES ({placeholders})",
                values,
            )
        except StoreError as exc:
            logger.error(
                "Error registering %s %s: %s", collection.label, record_id, exc.__cause__ or exc
            )
            raise InsertionError(collection.label) from exc
        logger.info("Registered %s %s", collection.label, record_id)
        return record_id

    async def create(self, collection_name: str, record: Mapping[str, Any]) -> int:
        """Allocate an id for ``record``, insert it and return the id.

        A failed allocation aborts before anything is written.  A
        collision with a concurrent insert surfaces as ``InsertionError``;
        retrying is up to the caller.
        """
        collection = get_collection(collection_name)
        try:
            record_id = await self.allocator.allocate(collection.name)
        except StoreError:
            logger.error("Error allocating an id for a new %s", collection.label)
            raise
        return await self.insert(collection.name, record_id, record)

    async def list(
        self,
        collection_name: str,
        sort_field: Optional[str] = None,
        direction: Optional[str] = None,
    ) -> List[Row]:
        """Return every record of the collection.

        ``sort_field`` must be ``id`` or one of the collection's fields
        and ``direction`` ``asc`` or ``desc``; unknown values fall back to
        the collection's default ordering.
        """
        collection = get_collection(collection_name)
        default_field, default_direction = collection.default_sort
        if sort_field not in collection.sortable:
            sort_field = default_field
        direction = (direction or "").upper()
        if direction not in ("ASC", "DESC"):
            direction = default_direction if sort_field == default_field else "ASC"
        try:
            return await self.store.all(
                f"SELECT * FROM {collection.table} ORDER BY {sort_field} {direction}"
            )
        except StoreError:
            logger.error("Error listing %ss", collection.label)
            raise

    async def search(self, collection_name: str, term: Optional[str]) -> List[Row]:
        """Return records whose search fields match ``term``.

        Customers match when the term occurs anywhere in the legal name
        or tax id; products match on the exact inventory code.
        """
        collection = get_collection(collection_name)
        term = term or ""
        if collection.search_exact:
            clause = " OR ".join(f"{name} = ?" for name in collection.search_fields)
            params = [term] * len(collection.search_fields)
        else:
            clause = " OR ".join(f"{name} LIKE ?" for name in collection.search_fields)
            params = [f"%{term}%"] * len(collection.search_fields)
        try:
            return await self.store.all(
                f"SELECT * FROM {collection.table} WHERE {clause}", params
            )
        except StoreError:
            logger.error("Error searching %ss for %r", collection.label, term)
            raise

    async def delete(self, collection_name: str, record_id: int) -> int:
        """Delete one record and return the number of rows removed.

        Raises
        ------
        RecordNotFoundError
            If no record has ``record_id``.
        """
        collection = get_collection(collection_name)
        try:
            result = await self.store.run(
                f"DELETE FROM {collection.table} WHERE id = ?", (record_id,)
            )
        except StoreError:
            logger.error("Error deleting %s %s", collection.label, record_id)
            raise
        if result.changes == 0:
            raise RecordNotFoundError(collection.label, record_id)
        logger.info("Deleted %s %s", collection.label, record_id)
        return result.changes
