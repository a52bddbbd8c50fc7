"""
Top-level router for version 1 of the API.

This router aggregates the per-resource routers under a unified
prefix.  When a new collection is added to the registry, add its
router here.
"""

from fastapi import APIRouter

from .endpoints import auth, customers, health, products

router = APIRouter()

router.include_router(customers.router, prefix="/customers", tags=["customers"])
router.include_router(products.router, prefix="/products", tags=["products"])
# Login and health define their own paths; no prefix.
router.include_router(auth.router, tags=["auth"])
router.include_router(health.router, tags=["health"])
