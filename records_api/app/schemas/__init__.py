"""
Pydantic schema definitions for API payloads.

Each collection (customers, products) defines its own models for
request and response bodies; ``collections`` holds the registry the
services use to build SQL.  Schemas are kept separate from the store
so the API representation can evolve independently of the tables.
"""
