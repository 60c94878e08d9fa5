"""Shared FastAPI dependency providers for controller layer."""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from backend.services.allocation_service import RoomAllocationService
from backend.services.inventory_service import InventoryService
from backend.utils.config import get_settings


def get_allocation_service(request: Request) -> RoomAllocationService:
    service = getattr(request.app.state, "allocation_service", None)
    if service is None:
        service = RoomAllocationService(settings=get_settings())
        request.app.state.allocation_service = service
    return service


def get_inventory_service(request: Request) -> InventoryService:
    service = getattr(request.app.state, "inventory_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Inventory service is not initialized",
        )
    return service
