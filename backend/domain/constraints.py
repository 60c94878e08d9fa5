"""Domain-level error types and validation rules for room allocation."""

from __future__ import annotations

import math
from numbers import Integral, Real


DEFAULT_MAX_ROOMS_PER_BOOKING = 5


class RoomAllocationError(Exception):
    """Base exception for every rejected allocation-core input."""


class InvalidRequestSizeError(RoomAllocationError):
    """Raised when the requested room count is below 1 or above the booking limit."""


class InsufficientAvailabilityError(RoomAllocationError):
    """Raised when fewer rooms are free than the request needs."""


class InvalidRoomIdentifierError(RoomAllocationError):
    """Raised when a value is not one of the building's room identifiers."""


class InvalidProbabilityError(RoomAllocationError):
    """Raised when an occupancy probability falls outside [0, 1]."""


class RoomUnavailableError(RoomAllocationError):
    """Raised when booking a room that is occupied or already booked."""


class InventoryConflictError(RoomAllocationError):
    """Raised when a snapshot lists a room as both occupied and booked."""


def validate_request_size(count: object, max_rooms_per_booking: int) -> int:
    if isinstance(count, bool) or not isinstance(count, Integral):
        raise InvalidRequestSizeError("requested room count must be an integer")
    count = int(count)
    if count < 1:
        raise InvalidRequestSizeError("requested room count must be at least 1")
    if count > max_rooms_per_booking:
        raise InvalidRequestSizeError(
            f"at most {max_rooms_per_booking} rooms can be booked at once"
        )
    return count


def validate_probability(probability: object) -> float:
    if isinstance(probability, bool) or not isinstance(probability, Real):
        raise InvalidProbabilityError("occupancy probability must be a number")
    value = float(probability)
    if math.isnan(value) or not 0.0 <= value <= 1.0:
        raise InvalidProbabilityError("occupancy probability must be between 0 and 1")
    return value
