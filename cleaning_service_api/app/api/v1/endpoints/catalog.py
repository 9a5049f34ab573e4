"""
Service catalog endpoints for API v1.

The catalog is public: listing services does not require a token so
that the offerings can be shown before a customer signs in.
"""

from typing import List

from fastapi import APIRouter, HTTPException, Path, status

from cleaning_service_api.app.core.db import SQLITE_MAX_INTEGER
from cleaning_service_api.app.schemas.service import ServiceRead
from cleaning_service_api.app.services.catalog_service import CatalogService


router = APIRouter()


@router.get("/services", response_model=List[ServiceRead])
async def list_services() -> List[ServiceRead]:
    """Return all services ordered by name."""
    return await CatalogService.list_services()


@router.get("/services/{service_id}", response_model=ServiceRead)
async def get_service(
    service_id: int = Path(..., ge=1, le=SQLITE_MAX_INTEGER, description="ID of the service"),
) -> ServiceRead:
    try:
        return await CatalogService.get_service(service_id)
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
