from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace

import pytest

from backend.domain.building import all_room_identifiers
from backend.domain.constraints import (
    InsufficientAvailabilityError,
    InvalidRoomIdentifierError,
    InventoryConflictError,
    RoomAllocationError,
    RoomUnavailableError,
)
from backend.domain.models import InventorySnapshot
from backend.services.inventory_service import InventoryService


def test_new_inventory_has_every_room_available(settings) -> None:
    service = InventoryService(settings=settings)

    snapshot = service.snapshot()

    assert snapshot.available == all_room_identifiers()
    assert snapshot.occupied == frozenset()
    assert snapshot.booked == frozenset()


def test_full_occupancy_leaves_nothing_to_allocate(settings) -> None:
    service = InventoryService(settings=settings)

    snapshot = service.randomize_occupancy(1.0)

    assert snapshot.available == []
    with pytest.raises(InsufficientAvailabilityError):
        service.find_optimal_rooms(1)


def test_randomize_uses_configured_seed(settings) -> None:
    seeded = replace(settings, occupancy_random_seed=5)
    first = InventoryService(settings=seeded).randomize_occupancy()
    second = InventoryService(settings=seeded).randomize_occupancy()

    assert first == second


def test_randomize_clears_bookings(settings) -> None:
    service = InventoryService(settings=settings)
    service.book_rooms([101, 102])

    snapshot = service.randomize_occupancy(0.0)

    assert snapshot.booked == frozenset()
    assert len(snapshot.available) == 97


def test_preview_does_not_book(settings) -> None:
    service = InventoryService(settings=settings)

    result = service.find_optimal_rooms(3)

    assert result.rooms == (101, 102, 103)
    assert service.snapshot().booked == frozenset()


def test_book_rooms_marks_rooms_booked(settings) -> None:
    service = InventoryService(settings=settings)

    snapshot = service.book_rooms([305, 304])

    assert snapshot.booked == frozenset({304, 305})
    assert 304 not in snapshot.available
    assert len(snapshot.available) == 95


def test_booking_an_unavailable_room_raises_and_changes_nothing(settings) -> None:
    service = InventoryService(settings=settings)
    service.book_rooms([101])

    with pytest.raises(RoomUnavailableError):
        service.book_rooms([102, 101])

    assert service.snapshot().booked == frozenset({101})


def test_booking_unknown_room_raises(settings) -> None:
    service = InventoryService(settings=settings)

    with pytest.raises(InvalidRoomIdentifierError):
        service.book_rooms([111])


def test_booking_nothing_raises(settings) -> None:
    service = InventoryService(settings=settings)

    with pytest.raises(ValueError):
        service.book_rooms([])


def test_consecutive_optimal_bookings_never_overlap(settings) -> None:
    service = InventoryService(settings=settings)

    first = service.book_optimal_rooms(3)
    second = service.book_optimal_rooms(3)

    assert first.rooms == (101, 102, 103)
    assert second.rooms == (201, 202, 203)
    assert service.snapshot().booked == frozenset(first.rooms + second.rooms)


def test_concurrent_optimal_bookings_are_disjoint(settings) -> None:
    service = InventoryService(settings=settings)

    with ThreadPoolExecutor(max_workers=8) as executor:
        results = list(executor.map(lambda _: service.book_optimal_rooms(2), range(20)))

    booked = [room for result in results for room in result.rooms]
    assert len(booked) == len(set(booked)) == 40
    assert service.snapshot().booked == frozenset(booked)


def test_reset_clears_everything(settings) -> None:
    service = InventoryService(settings=settings)
    service.randomize_occupancy(0.5, seed=1)
    service.book_optimal_rooms(1)

    snapshot = service.reset()

    assert snapshot == InventorySnapshot()


def test_snapshot_rejects_rooms_both_occupied_and_booked() -> None:
    with pytest.raises(InventoryConflictError, match="101") as excinfo:
        InventorySnapshot(occupied=frozenset({101}), booked=frozenset({101, 102}))

    assert isinstance(excinfo.value, RoomAllocationError)


def test_snapshot_rejects_unknown_rooms() -> None:
    with pytest.raises(InvalidRoomIdentifierError):
        InventorySnapshot(occupied=frozenset({1008}))
