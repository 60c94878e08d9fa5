"""Fixed building geometry: room identifiers, floors and positions.

Floors 1-9 hold ten rooms numbered ``floor * 100 + index`` (101-110,
201-210, ...). The top floor is shorter and holds seven rooms numbered
1001-1007. Positions are zero-based and count away from the shared
stairs/lift corridor, which sits at position 0 on every floor.
"""

from __future__ import annotations

from functools import lru_cache
from numbers import Integral

from backend.domain.constraints import InvalidRoomIdentifierError


FLOOR_COUNT = 10
ROOMS_PER_FLOOR = 10
TOP_FLOOR_ROOMS = 7
TOP_FLOOR = FLOOR_COUNT
TOP_FLOOR_BASE = 1000
TOTAL_ROOMS = (FLOOR_COUNT - 1) * ROOMS_PER_FLOOR + TOP_FLOOR_ROOMS


def floor_capacity(floor: int) -> int:
    """Number of rooms on ``floor``."""
    if isinstance(floor, bool) or not isinstance(floor, int) or not 1 <= floor <= FLOOR_COUNT:
        raise ValueError(f"floor must be an integer between 1 and {FLOOR_COUNT}")
    return TOP_FLOOR_ROOMS if floor == TOP_FLOOR else ROOMS_PER_FLOOR


def room_identifier(floor: int, position: int) -> int:
    """Encode ``(floor, position)`` back into a room identifier."""
    capacity = floor_capacity(floor)
    if isinstance(position, bool) or not isinstance(position, int) or not 0 <= position < capacity:
        raise ValueError(f"position on floor {floor} must be between 0 and {capacity - 1}")
    if floor == TOP_FLOOR:
        return TOP_FLOOR_BASE + position + 1
    return floor * 100 + position + 1


@lru_cache(maxsize=1)
def _room_universe() -> tuple[int, ...]:
    return tuple(
        room_identifier(floor, position)
        for floor in range(1, FLOOR_COUNT + 1)
        for position in range(floor_capacity(floor))
    )


@lru_cache(maxsize=1)
def _valid_rooms() -> frozenset[int]:
    return frozenset(_room_universe())


def all_room_identifiers() -> list[int]:
    """Every room in canonical order: low floor first, then low position."""
    return list(_room_universe())


def rooms_on_floor(floor: int) -> list[int]:
    return [room_identifier(floor, position) for position in range(floor_capacity(floor))]


def is_valid_room(room: object) -> bool:
    if isinstance(room, bool) or not isinstance(room, Integral):
        return False
    return int(room) in _valid_rooms()


def ensure_valid_room(room: object) -> int:
    if not is_valid_room(room):
        raise InvalidRoomIdentifierError(f"{room!r} is not a valid room identifier")
    return int(room)  # type: ignore[call-overload]


def floor_of(room: int) -> int:
    room = ensure_valid_room(room)
    if room >= TOP_FLOOR_BASE:
        return TOP_FLOOR
    return room // 100


def position_on_floor(room: int) -> int:
    room = ensure_valid_room(room)
    if room >= TOP_FLOOR_BASE:
        return room - TOP_FLOOR_BASE - 1
    return room % 100 - 1


def canonical_sort_key(room: int) -> tuple[int, int]:
    """Sort key shared by the travel-time model and the allocation engine."""
    return floor_of(room), position_on_floor(room)
