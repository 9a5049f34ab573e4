"""
Endpoint subpackage for API v1.

Each module defines an APIRouter for one domain (auth, catalog,
bookings).  The routers are aggregated in ``router.py``.
"""
