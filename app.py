"""
app.py — FastAPI application factory and startup lifecycle.

This is the ASGI application object imported by uvicorn.
It wires the allocation and inventory services, registers the router, and
optionally seeds a random occupancy snapshot at startup.

Usage (via launcher):
    python main.py

Usage (direct uvicorn):
    uvicorn app:app --reload
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from backend.controllers.booking_controller import router as booking_router
from backend.services.allocation_service import RoomAllocationService
from backend.services.inventory_service import InventoryService
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build and wire the FastAPI application.

    Services live on app.state; every dependency is traceable from this
    function and there are no module-level singletons besides ``app``.
    """
    settings = settings or get_settings()

    allocation_service = RoomAllocationService(settings=settings)
    inventory_service = InventoryService(
        settings=settings,
        allocation_service=allocation_service,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Run startup initialization before accepting requests."""
        _startup(app, settings)
        yield

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.include_router(booking_router)

    app.state.settings = settings
    app.state.allocation_service = allocation_service
    app.state.inventory_service = inventory_service

    return app


def _startup(app: FastAPI, settings: Settings) -> None:
    """Seed the demo occupancy snapshot when enabled. Safe to re-run."""
    inventory_service: InventoryService = app.state.inventory_service

    if settings.initial_occupancy_on_startup:
        logger.info(
            "Startup: sampling initial occupancy | probability=%.3f",
            settings.default_occupancy_probability,
        )
        inventory_service.randomize_occupancy()
    else:
        logger.info("Startup: starting with an empty inventory")

    logger.info("Startup complete — system ready")


# Module-level app object for uvicorn
app = create_app()
