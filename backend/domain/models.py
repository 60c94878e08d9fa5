"""Domain value types for inventory snapshots and allocation results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from backend.domain.building import all_room_identifiers, canonical_sort_key, ensure_valid_room
from backend.domain.constraints import InventoryConflictError


STRATEGY_SINGLE_ROOM = "single_room"
STRATEGY_SAME_FLOOR = "same_floor"
STRATEGY_MULTI_FLOOR = "multi_floor"


def _room_set(rooms: Iterable[int]) -> frozenset[int]:
    return frozenset(ensure_valid_room(room) for room in rooms)


@dataclass(frozen=True)
class InventorySnapshot:
    """Occupied and booked rooms at one point in time; the rest are available."""

    occupied: frozenset[int] = field(default_factory=frozenset)
    booked: frozenset[int] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        occupied = _room_set(self.occupied)
        booked = _room_set(self.booked)
        overlap = occupied & booked
        if overlap:
            raise InventoryConflictError(
                f"rooms cannot be both occupied and booked: {sorted(overlap, key=canonical_sort_key)}"
            )
        object.__setattr__(self, "occupied", occupied)
        object.__setattr__(self, "booked", booked)

    @property
    def available(self) -> list[int]:
        taken = self.occupied | self.booked
        return [room for room in all_room_identifiers() if room not in taken]

    def to_dict(self) -> dict[str, list[int]]:
        return {
            "occupied": sorted(self.occupied, key=canonical_sort_key),
            "booked": sorted(self.booked, key=canonical_sort_key),
            "available": self.available,
        }


@dataclass(frozen=True)
class AllocationResult:
    rooms: tuple[int, ...]
    travel_time: int
    strategy: str

    def to_dict(self) -> dict[str, object]:
        return {
            "rooms": list(self.rooms),
            "travel_time": self.travel_time,
            "strategy": self.strategy,
        }


@dataclass(frozen=True)
class FloorSummary:
    floor: int
    capacity: int
    available: int
    occupied: int
    booked: int
    occupancy_rate: float


@dataclass(frozen=True)
class InventorySummary:
    total_rooms: int
    available: int
    occupied: int
    booked: int
    occupancy_rate: float
    floors: list[FloorSummary]
