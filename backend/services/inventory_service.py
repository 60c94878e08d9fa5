"""In-memory owner of occupied/booked room state for one building.

The allocation engine is stateless; this service is the single writer of the
inventory. Every mutation and every select-then-book sequence runs under one
lock so concurrent callers can never be handed overlapping rooms.
"""

from __future__ import annotations

from threading import RLock
from typing import Iterable, Optional

from backend.domain.building import canonical_sort_key, ensure_valid_room
from backend.domain.constraints import RoomUnavailableError
from backend.domain.models import AllocationResult, InventorySnapshot
from backend.domain.travel_time import total_travel_time
from backend.services.allocation_service import RoomAllocationService
from backend.services.occupancy_service import sample_occupancy
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)


class InventoryService:
    """Tracks occupancy and bookings and serialises booking requests."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        allocation_service: Optional[RoomAllocationService] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._allocation_service = allocation_service or RoomAllocationService(self._settings)
        self._lock = RLock()
        self._snapshot = InventorySnapshot()

    def snapshot(self) -> InventorySnapshot:
        with self._lock:
            return self._snapshot

    def randomize_occupancy(
        self,
        probability: Optional[float] = None,
        *,
        seed: Optional[int] = None,
    ) -> InventorySnapshot:
        """Replace occupancy with a random sample and clear all bookings."""
        resolved_probability = (
            probability
            if probability is not None
            else self._settings.default_occupancy_probability
        )
        resolved_seed = seed if seed is not None else self._settings.occupancy_random_seed
        occupied = sample_occupancy(resolved_probability, seed=resolved_seed)
        with self._lock:
            self._snapshot = InventorySnapshot(occupied=occupied)
            logger.info(
                "Occupancy randomized | probability=%.3f | occupied=%s",
                resolved_probability,
                len(occupied),
            )
            return self._snapshot

    def reset(self) -> InventorySnapshot:
        with self._lock:
            self._snapshot = InventorySnapshot()
            logger.info("Inventory reset")
            return self._snapshot

    def find_optimal_rooms(self, count: int) -> AllocationResult:
        """Preview an allocation against the current snapshot without booking."""
        with self._lock:
            available = self._snapshot.available
        return self._allocation_service.select(available, count)

    def book_rooms(self, rooms: Iterable[int]) -> InventorySnapshot:
        requested = {ensure_valid_room(room) for room in rooms}
        if not requested:
            raise ValueError("at least one room must be provided for booking")
        with self._lock:
            current = self._snapshot
            unavailable = requested & (current.occupied | current.booked)
            if unavailable:
                raise RoomUnavailableError(
                    "rooms are not available: "
                    + ", ".join(str(room) for room in sorted(unavailable, key=canonical_sort_key))
                )
            self._snapshot = InventorySnapshot(
                occupied=current.occupied,
                booked=current.booked | requested,
            )
            logger.info(
                "Rooms booked | rooms=%s | travel_time=%s",
                sorted(requested, key=canonical_sort_key),
                total_travel_time(requested),
            )
            return self._snapshot

    def book_optimal_rooms(self, count: int) -> AllocationResult:
        """Select and book ``count`` rooms as one atomic step."""
        with self._lock:
            result = self._allocation_service.select(self._snapshot.available, count)
            self.book_rooms(result.rooms)
            return result
