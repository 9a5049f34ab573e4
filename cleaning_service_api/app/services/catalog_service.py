"""
Read‑only access to the service catalog.

The catalog is seeded by ``core.db.init_db``; the API never modifies it.
"""

from typing import List

from cleaning_service_api.app.core.db import get_connection
from cleaning_service_api.app.schemas.service import ServiceRead


class CatalogService:
    """Queries over the ``services`` table."""

    @classmethod
    async def list_services(cls) -> List[ServiceRead]:
        """Return every service ordered by name."""
        conn = get_connection()
        try:
            rows = conn.execute(
                "SELECT id, name, description, price FROM services ORDER BY name"
            ).fetchall()
            return [ServiceRead(**dict(row)) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get_service(cls, service_id: int) -> ServiceRead:
        """Return one service.  Raises ``LookupError`` if it does not exist."""
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT id, name, description, price FROM services WHERE id = ?",
                (service_id,),
            ).fetchone()
        finally:
            conn.close()
        if not row:
            raise LookupError(f"Service {service_id} not found")
        return ServiceRead(**dict(row))
