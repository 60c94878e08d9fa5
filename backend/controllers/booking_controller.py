"""HTTP controller layer for room inventory, allocation and booking."""

from __future__ import annotations

from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from backend.controllers.dependencies import get_allocation_service, get_inventory_service
from backend.domain.building import (
    FLOOR_COUNT,
    ROOMS_PER_FLOOR,
    TOP_FLOOR_ROOMS,
    TOTAL_ROOMS,
    all_room_identifiers,
)
from backend.domain.constraints import (
    InsufficientAvailabilityError,
    InventoryConflictError,
    RoomAllocationError,
    RoomUnavailableError,
)
from backend.domain.models import AllocationResult, InventorySnapshot
from backend.domain.travel_time import (
    HORIZONTAL_TRAVEL_TIME,
    MAX_EXACT_ROOMS,
    VERTICAL_TRAVEL_TIME,
    exact_travel_time,
    total_travel_time,
    travel_order,
)
from backend.services.allocation_service import RoomAllocationService
from backend.services.inventory_service import InventoryService
from backend.services.statistics_service import summarize_inventory
from backend.utils.logger import get_logger


logger = get_logger(__name__)

router = APIRouter(tags=["booking"])


class BuildingResponse(BaseModel):
    floor_count: int = Field(gt=0)
    rooms_per_floor: int = Field(gt=0)
    top_floor_rooms: int = Field(gt=0)
    total_rooms: int = Field(gt=0)
    max_rooms_per_booking: int = Field(gt=0)
    horizontal_travel_time: int = Field(ge=0)
    vertical_travel_time: int = Field(ge=0)
    room_ids: list[int]


class InventoryResponse(BaseModel):
    occupied: list[int]
    booked: list[int]
    available: list[int]


class FloorStatisticsResponse(BaseModel):
    floor: int = Field(ge=1)
    capacity: int = Field(gt=0)
    available: int = Field(ge=0)
    occupied: int = Field(ge=0)
    booked: int = Field(ge=0)
    occupancy_rate: float = Field(ge=0.0, le=1.0)


class StatisticsResponse(BaseModel):
    total_rooms: int = Field(gt=0)
    available: int = Field(ge=0)
    occupied: int = Field(ge=0)
    booked: int = Field(ge=0)
    occupancy_rate: float = Field(ge=0.0, le=1.0)
    floors: list[FloorStatisticsResponse]


class RandomOccupancyRequest(BaseModel):
    """Range checks live in the domain so the caller sees the named error."""

    probability: float | None = None
    seed: int | None = Field(default=None, ge=0)


class RoomCountRequest(BaseModel):
    count: int


class BookRoomsRequest(BaseModel):
    rooms: list[int] = Field(min_length=1)


class AllocationResponse(BaseModel):
    rooms: list[int]
    travel_time: int = Field(ge=0)
    strategy: str


class TravelTimeRequest(BaseModel):
    rooms: list[int]
    exact: bool = False


class TravelTimeResponse(BaseModel):
    route: list[int]
    travel_time: int = Field(ge=0)
    exact_travel_time: int | None = Field(default=None, ge=0)


def _inventory_response(snapshot: InventorySnapshot) -> InventoryResponse:
    return InventoryResponse(**snapshot.to_dict())


def _allocation_response(result: AllocationResult) -> AllocationResponse:
    return AllocationResponse(**result.to_dict())


def _raise_http_error(exc: RoomAllocationError) -> NoReturn:
    """Invalid input maps to 400; a valid request the inventory cannot serve maps to 409."""
    if isinstance(
        exc,
        (InsufficientAvailabilityError, InventoryConflictError, RoomUnavailableError),
    ):
        code = status.HTTP_409_CONFLICT
    else:
        code = status.HTTP_400_BAD_REQUEST
    raise HTTPException(status_code=code, detail=str(exc)) from exc


@router.get("/health", status_code=status.HTTP_200_OK)
async def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/building", response_model=BuildingResponse)
async def building(
    allocation_service: RoomAllocationService = Depends(get_allocation_service),
) -> BuildingResponse:
    """Constants the presentation layer reads instead of hardcoding."""
    return BuildingResponse(
        floor_count=FLOOR_COUNT,
        rooms_per_floor=ROOMS_PER_FLOOR,
        top_floor_rooms=TOP_FLOOR_ROOMS,
        total_rooms=TOTAL_ROOMS,
        max_rooms_per_booking=allocation_service.max_rooms_per_booking,
        horizontal_travel_time=HORIZONTAL_TRAVEL_TIME,
        vertical_travel_time=VERTICAL_TRAVEL_TIME,
        room_ids=all_room_identifiers(),
    )


@router.get("/rooms", response_model=InventoryResponse)
async def list_rooms(
    service: InventoryService = Depends(get_inventory_service),
) -> InventoryResponse:
    return _inventory_response(service.snapshot())


@router.get("/rooms/statistics", response_model=StatisticsResponse)
async def room_statistics(
    service: InventoryService = Depends(get_inventory_service),
) -> StatisticsResponse:
    summary = summarize_inventory(service.snapshot())
    return StatisticsResponse(
        total_rooms=summary.total_rooms,
        available=summary.available,
        occupied=summary.occupied,
        booked=summary.booked,
        occupancy_rate=summary.occupancy_rate,
        floors=[
            FloorStatisticsResponse(
                floor=item.floor,
                capacity=item.capacity,
                available=item.available,
                occupied=item.occupied,
                booked=item.booked,
                occupancy_rate=item.occupancy_rate,
            )
            for item in summary.floors
        ],
    )


@router.post("/rooms/occupancy/random", response_model=InventoryResponse)
async def randomize_occupancy(
    payload: RandomOccupancyRequest,
    service: InventoryService = Depends(get_inventory_service),
) -> InventoryResponse:
    """Resample occupancy; existing bookings are cleared."""
    try:
        snapshot = service.randomize_occupancy(payload.probability, seed=payload.seed)
        return _inventory_response(snapshot)
    except RoomAllocationError as exc:
        _raise_http_error(exc)
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected occupancy sampling failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate random occupancy",
        ) from exc


@router.post("/rooms/reset", response_model=InventoryResponse)
async def reset_rooms(
    service: InventoryService = Depends(get_inventory_service),
) -> InventoryResponse:
    return _inventory_response(service.reset())


@router.post("/rooms/optimal", response_model=AllocationResponse)
async def find_optimal_rooms(
    payload: RoomCountRequest,
    service: InventoryService = Depends(get_inventory_service),
) -> AllocationResponse:
    """Preview the allocation for ``count`` rooms without booking them."""
    try:
        return _allocation_response(service.find_optimal_rooms(payload.count))
    except RoomAllocationError as exc:
        _raise_http_error(exc)
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected room selection failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to find optimal rooms",
        ) from exc


@router.post("/bookings", response_model=InventoryResponse)
async def book_rooms(
    payload: BookRoomsRequest,
    service: InventoryService = Depends(get_inventory_service),
) -> InventoryResponse:
    try:
        return _inventory_response(service.book_rooms(payload.rooms))
    except RoomAllocationError as exc:
        _raise_http_error(exc)
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected booking failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to book rooms",
        ) from exc


@router.post("/bookings/optimal", response_model=AllocationResponse)
async def book_optimal_rooms(
    payload: RoomCountRequest,
    service: InventoryService = Depends(get_inventory_service),
) -> AllocationResponse:
    """Select and book ``count`` rooms in one step."""
    try:
        return _allocation_response(service.book_optimal_rooms(payload.count))
    except RoomAllocationError as exc:
        _raise_http_error(exc)
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected optimal booking failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to book optimal rooms",
        ) from exc


@router.post("/travel-time", response_model=TravelTimeResponse)
async def travel_time(payload: TravelTimeRequest) -> TravelTimeResponse:
    if payload.exact and len(set(payload.rooms)) > MAX_EXACT_ROOMS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"exact travel time supports at most {MAX_EXACT_ROOMS} rooms",
        )
    try:
        route = travel_order(payload.rooms)
        exact = exact_travel_time(route) if payload.exact else None
        return TravelTimeResponse(
            route=route,
            travel_time=total_travel_time(route),
            exact_travel_time=exact,
        )
    except RoomAllocationError as exc:
        _raise_http_error(exc)
    except Exception as exc:
        logger.exception("Unexpected travel time failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to compute travel time",
        ) from exc
