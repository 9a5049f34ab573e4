"""
Top‑level router for version 1 of the API.

Aggregates the domain routers.  Each router defines its full paths
(``/register``, ``/services``, ``/bookings``...) so no prefix is added
here; the version prefix is applied in ``main.py``.
"""

from fastapi import APIRouter

from .endpoints import auth, bookings, catalog


router = APIRouter()

router.include_router(auth.router, tags=["auth"])
router.include_router(catalog.router, tags=["services"])
router.include_router(bookings.router, tags=["bookings"])
