"""Walking-time cost model for visiting a set of rooms.

A single vertical corridor (stairs/lift) sits at position 0 of every floor.
Moving between floors means walking to the corridor, climbing, and walking
out to the destination room.

``total_travel_time`` visits rooms in a fixed (floor, position) order. That
order is a heuristic, not a shortest-route solver; ``exact_travel_time``
searches every visiting order for small sets when the true minimum matters.
"""

from __future__ import annotations

from itertools import permutations
from typing import Iterable

from backend.domain.building import canonical_sort_key, floor_of, position_on_floor


HORIZONTAL_TRAVEL_TIME = 1
VERTICAL_TRAVEL_TIME = 2
CORRIDOR_POSITION = 0
MAX_EXACT_ROOMS = 5


def horizontal_travel_time(room_a: int, room_b: int) -> int:
    """Minutes walked between two rooms on the same floor."""
    if floor_of(room_a) != floor_of(room_b):
        raise ValueError(f"rooms {room_a} and {room_b} are on different floors")
    return abs(position_on_floor(room_a) - position_on_floor(room_b)) * HORIZONTAL_TRAVEL_TIME


def vertical_travel_time(floor_a: int, floor_b: int) -> int:
    return abs(floor_a - floor_b) * VERTICAL_TRAVEL_TIME


def corridor_travel_time(room: int) -> int:
    """Minutes walked between ``room`` and the corridor on its floor."""
    return abs(position_on_floor(room) - CORRIDOR_POSITION) * HORIZONTAL_TRAVEL_TIME


def leg_travel_time(room_a: int, room_b: int) -> int:
    """Cost of a single move from ``room_a`` to ``room_b``."""
    floor_a = floor_of(room_a)
    floor_b = floor_of(room_b)
    if floor_a == floor_b:
        return horizontal_travel_time(room_a, room_b)
    return (
        vertical_travel_time(floor_a, floor_b)
        + corridor_travel_time(room_a)
        + corridor_travel_time(room_b)
    )


def travel_order(rooms: Iterable[int]) -> list[int]:
    """Distinct rooms in the fixed visiting order (floor, then position)."""
    return sorted(set(rooms), key=canonical_sort_key)


def _route_cost(route: list[int] | tuple[int, ...]) -> int:
    return sum(leg_travel_time(current, following) for current, following in zip(route, route[1:]))


def total_travel_time(rooms: Iterable[int]) -> int:
    ordered = travel_order(rooms)
    if len(ordered) <= 1:
        return 0
    return _route_cost(ordered)


def exact_travel_time(rooms: Iterable[int]) -> int:
    """Cheapest cost over every visiting order; limited to ``MAX_EXACT_ROOMS`` rooms."""
    ordered = travel_order(rooms)
    if len(ordered) > MAX_EXACT_ROOMS:
        raise ValueError(f"exact travel time supports at most {MAX_EXACT_ROOMS} rooms")
    if len(ordered) <= 1:
        return 0
    return min(_route_cost(route) for route in permutations(ordered))
