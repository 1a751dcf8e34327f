# ============================================================================
# app/api/v1/public/services.py
# ============================================================================
from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app.config.database import get_db
from app.core.exceptions import ServiceNotFoundError
from app.schemas.catalog import ServiceResponse
from app.services.catalog.catalog_repository import CatalogRepository

router = APIRouter(prefix="/services", tags=["services"])


@router.get("", response_model=List[ServiceResponse])
def list_services(
        category: Optional[str] = Query(None, description="Filter by category (hair, nails, facial, ...)"),
        db: Session = Depends(get_db)
):
    """List active salon services"""
    return CatalogRepository.list_services(db, category=category)


@router.get("/{service_id}", response_model=ServiceResponse)
def get_service(
        service_id: int = Path(..., description="The service ID"),
        db: Session = Depends(get_db)
):
    service = CatalogRepository.get_service(db, service_id)
    if not service:
        raise ServiceNotFoundError(service_id)
    return service
