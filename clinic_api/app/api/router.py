"""
Top‑level API router.

Aggregates the domain routers under the ``/api`` prefix applied by the
application.  When new endpoints are added, include their routers
here.
"""

from fastapi import APIRouter

from .endpoints import admin, appointments, contacts, health

router = APIRouter()

router.include_router(appointments.router, prefix="/appointments", tags=["appointments"])
router.include_router(contacts.router, prefix="/contacts", tags=["contacts"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
router.include_router(health.router, prefix="/health", tags=["health"])
