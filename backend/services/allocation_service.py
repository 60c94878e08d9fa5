"""Room allocation engine: pick the lowest travel-time subset of free rooms."""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Optional

from backend.domain.building import canonical_sort_key, ensure_valid_room, floor_of, position_on_floor
from backend.domain.constraints import (
    DEFAULT_MAX_ROOMS_PER_BOOKING,
    InsufficientAvailabilityError,
    validate_request_size,
)
from backend.domain.models import (
    STRATEGY_MULTI_FLOOR,
    STRATEGY_SAME_FLOOR,
    STRATEGY_SINGLE_ROOM,
    AllocationResult,
)
from backend.domain.travel_time import total_travel_time
from backend.utils.config import TIE_BREAK_POLICIES, Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)


def _snapshot(available_rooms: Iterable[int]) -> tuple[int, ...]:
    """Validated, de-duplicated private copy in canonical order."""
    unique = {ensure_valid_room(room) for room in available_rooms}
    return tuple(sorted(unique, key=canonical_sort_key))


def group_rooms_by_floor(rooms: Iterable[int]) -> dict[int, list[int]]:
    """Rooms per floor, each list sorted by position."""
    grouped: dict[int, list[int]] = defaultdict(list)
    for room in rooms:
        grouped[floor_of(room)].append(room)
    return {
        floor: sorted(floor_rooms, key=position_on_floor)
        for floor, floor_rooms in grouped.items()
    }


def rank_floors(rooms_by_floor: dict[int, list[int]]) -> list[int]:
    """Most free rooms first; equal counts fall back to the lower floor."""
    return sorted(rooms_by_floor, key=lambda floor: (-len(rooms_by_floor[floor]), floor))


def _is_better(
    candidate: tuple[int, ...],
    cost: int,
    best: Optional[tuple[int, ...]],
    best_cost: int,
    tie_break: str,
) -> bool:
    if best is None or cost < best_cost:
        return True
    if cost == best_cost and tie_break == "lexicographic":
        return candidate < best
    return False


def _best_same_floor_window(
    rooms_by_floor: dict[int, list[int]],
    ranked_floors: list[int],
    count: int,
    tie_break: str,
) -> Optional[tuple[tuple[int, ...], int]]:
    best: Optional[tuple[int, ...]] = None
    best_cost = 0
    for floor in ranked_floors:
        floor_rooms = rooms_by_floor[floor]
        if len(floor_rooms) < count:
            continue
        for start in range(len(floor_rooms) - count + 1):
            window = tuple(floor_rooms[start:start + count])
            cost = total_travel_time(window)
            if _is_better(window, cost, best, best_cost, tie_break):
                best = window
                best_cost = cost
    if best is None:
        return None
    return best, best_cost


def _multi_floor_fallback(
    rooms_by_floor: dict[int, list[int]],
    ranked_floors: list[int],
    count: int,
) -> tuple[int, ...]:
    selected: list[int] = []
    remaining = count
    for floor in ranked_floors:
        if remaining <= 0:
            break
        taken = rooms_by_floor[floor][:remaining]
        selected.extend(taken)
        remaining -= len(taken)

    if remaining > 0:
        raise InsufficientAvailabilityError(
            f"only {len(selected)} rooms could be gathered across floors; {count} requested"
        )
    return tuple(sorted(selected, key=canonical_sort_key))


def select_rooms(
    available_rooms: Iterable[int],
    count: int,
    *,
    max_rooms_per_booking: int = DEFAULT_MAX_ROOMS_PER_BOOKING,
    tie_break: str = "first_minimum",
) -> AllocationResult:
    """Choose ``count`` free rooms with minimal total travel time.

    Single-floor contiguous windows are preferred; when no floor holds enough
    free rooms, rooms are taken greedily from the floors with the most free
    rooms. ``available_rooms`` is copied and never mutated.

    Raises:
        InvalidRequestSizeError: ``count`` is below 1 or above the booking limit.
        InsufficientAvailabilityError: fewer than ``count`` rooms are free.
        InvalidRoomIdentifierError: ``available_rooms`` holds an unknown room.
    """
    if tie_break not in TIE_BREAK_POLICIES:
        raise ValueError(f"tie_break must be one of {', '.join(TIE_BREAK_POLICIES)}")
    count = validate_request_size(count, max_rooms_per_booking)
    rooms = _snapshot(available_rooms)
    if count > len(rooms):
        raise InsufficientAvailabilityError(
            f"only {len(rooms)} rooms are available; cannot book {count}"
        )

    if count == 1:
        return AllocationResult(rooms=(rooms[0],), travel_time=0, strategy=STRATEGY_SINGLE_ROOM)

    rooms_by_floor = group_rooms_by_floor(rooms)
    ranked_floors = rank_floors(rooms_by_floor)

    same_floor = _best_same_floor_window(rooms_by_floor, ranked_floors, count, tie_break)
    if same_floor is not None:
        window, cost = same_floor
        return AllocationResult(rooms=window, travel_time=cost, strategy=STRATEGY_SAME_FLOOR)

    selected = _multi_floor_fallback(rooms_by_floor, ranked_floors, count)
    return AllocationResult(
        rooms=selected,
        travel_time=total_travel_time(selected),
        strategy=STRATEGY_MULTI_FLOOR,
    )


class RoomAllocationService:
    """Applies configured booking limits and tie-break policy to ``select_rooms``."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()

    @property
    def max_rooms_per_booking(self) -> int:
        return self._settings.max_rooms_per_booking

    def select(self, available_rooms: Iterable[int], count: int) -> AllocationResult:
        try:
            result = select_rooms(
                available_rooms,
                count,
                max_rooms_per_booking=self._settings.max_rooms_per_booking,
                tie_break=self._settings.allocation_tie_break,
            )
        except InsufficientAvailabilityError as exc:
            logger.warning("Room selection failed | count=%s | reason=%s", count, exc)
            raise
        logger.info(
            "Rooms selected | count=%s | strategy=%s | rooms=%s | travel_time=%s",
            count,
            result.strategy,
            list(result.rooms),
            result.travel_time,
        )
        return result
