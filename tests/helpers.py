"""Test doubles and seeding helpers shared by the test modules."""

from records_api.app.core.errors import StoreError


class FailingStore:
    """Store whose every operation fails, recording the attempts."""

    def __init__(self):
        self.calls = []

    async def get(self, sql, params=()):
        self.calls.append(("get", sql))
        raise StoreError(operation="get")

    async def all(self, sql, params=()):
        self.calls.append(("all", sql))
        raise StoreError(operation="all")

    async def run(self, sql, params=()):
        self.calls.append(("run", sql))
        raise StoreError(operation="run")


async def seed_ids(store, table, ids):
    """Insert bare rows with the given ids."""
    for record_id in ids:
        await store.run(f"INSERT INTO {table} (id) VALUES (?)", (record_id,))


async def table_ids(store, table):
    rows = await store.all(f"SELECT id FROM {table} ORDER BY id")
    return [row["id"] for row in rows]
