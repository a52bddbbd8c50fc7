"""
Identifier allocation for record collections.

New records do not take ``MAX(id) + 1`` blindly: the allocator first
looks for an interior gap left by a deletion and reuses it, so ids
stay dense.  The lookup works on pairs ``(k, k + 1)``:

* the smallest existing id ``k`` whose successor ``k + 1`` is free
  yields the candidate ``k + 1``;
* when there is no such ``k`` (empty table) or the candidate is ``1``,
  the allocator falls back to ``MAX(id) + 1`` (``1`` for an empty
  table).

Because the gap query only ever proposes the successor of an existing
id, a hole at the very front of the table (no record with id 1) is
never filled: ``{2, 3}`` allocates ``4``.

The read-then-insert sequence is not atomic.  Two concurrent callers
may receive the same id; the primary key constraint makes the second
insert fail instead of overwriting data.
"""

import logging

from ..core.db import RecordStore
from ..schemas.collections import get_collection

logger = logging.getLogger(__name__)


class IdAllocator:
    """Compute the next identifier for a collection."""

    def __init__(self, store: RecordStore) -> None:
        self.store = store

    async def allocate(self, collection_name: str) -> int:
        """Return the id the next record of ``collection_name`` should use.

        Raises
        ------
        UnknownCollectionError
            If the collection is not registered.
        StoreError
            If either lookup fails; no id is produced in that case.
        """
        table = get_collection(collection_name).table

        row = await self.store.get(
            f"SELECT t1.id + 1 AS next_id FROM {table} t1 "
            f"WHERE NOT EXISTS (SELECT 1 FROM {table} t2 WHERE t2.id = t1.id + 1) "
            "ORDER BY t1.id ASC LIMIT 1"
        )
        candidate = row["next_id"] if row and row["next_id"] else None

        if candidate is not None and candidate != 1:
            logger.debug("Allocated id %s in %s (gap)", candidate, table)
            return candidate

        row = await self.store.get(f"SELECT MAX(id) AS max_id FROM {table}")
        candidate = row["max_id"] + 1 if row and row["max_id"] else 1
        logger.debug("Allocated id %s in %s (max)", candidate, table)
        return candidate
