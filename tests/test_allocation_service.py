"""Tests for the room allocation engine."""

from __future__ import annotations

from dataclasses import replace

import numpy as np
import pytest

from backend.domain.building import all_room_identifiers
from backend.domain.constraints import (
    InsufficientAvailabilityError,
    InvalidRequestSizeError,
    InvalidRoomIdentifierError,
)
from backend.domain.models import STRATEGY_MULTI_FLOOR, STRATEGY_SAME_FLOOR, STRATEGY_SINGLE_ROOM
from backend.domain.travel_time import total_travel_time
from backend.services.allocation_service import (
    RoomAllocationService,
    group_rooms_by_floor,
    rank_floors,
    select_rooms,
)
from backend.services.occupancy_service import sample_occupancy


# --- Reference scenarios ---

def test_single_floor_returns_leftmost_contiguous_window() -> None:
    result = select_rooms(set(range(301, 311)), 3)

    assert result.rooms == (301, 302, 303)
    assert result.travel_time == 2
    assert result.strategy == STRATEGY_SAME_FLOOR


def test_multi_floor_fallback_when_no_floor_has_enough_rooms() -> None:
    result = select_rooms({101, 1001}, 2)

    assert set(result.rooms) == {101, 1001}
    assert result.travel_time == 18
    assert result.strategy == STRATEGY_MULTI_FLOOR


def test_count_above_booking_limit_is_invalid() -> None:
    with pytest.raises(InvalidRequestSizeError):
        select_rooms(all_room_identifiers(), 6)


def test_count_above_available_rooms_is_insufficient() -> None:
    with pytest.raises(InsufficientAvailabilityError):
        select_rooms({101, 102}, 3)


# --- Request size validation ---

@pytest.mark.parametrize("count", [0, -1, 6, 2.0, "2", None, True])
def test_invalid_request_sizes(count) -> None:
    with pytest.raises(InvalidRequestSizeError):
        select_rooms(all_room_identifiers(), count)


def test_request_size_is_checked_before_availability() -> None:
    with pytest.raises(InvalidRequestSizeError):
        select_rooms({101}, 6)


def test_empty_availability_is_insufficient() -> None:
    with pytest.raises(InsufficientAvailabilityError):
        select_rooms(set(), 1)


def test_unknown_room_in_available_set_is_rejected() -> None:
    with pytest.raises(InvalidRoomIdentifierError):
        select_rooms({101, 102, 111}, 2)


# --- Single room ---

def test_single_room_is_first_in_canonical_order() -> None:
    result = select_rooms([1001, 305, 210], 1)

    assert result.rooms == (210,)
    assert result.travel_time == 0
    assert result.strategy == STRATEGY_SINGLE_ROOM


# --- Same-floor pass ---

def test_fuller_floor_wins_ties_on_cost() -> None:
    available = {201, 202, 203, 501, 502, 503, 504}

    assert select_rooms(available, 3).rooms == (501, 502, 503)


def test_lexicographic_tie_break_prefers_smallest_rooms() -> None:
    available = {201, 202, 203, 501, 502, 503, 504}

    result = select_rooms(available, 3, tie_break="lexicographic")

    assert result.rooms == (201, 202, 203)


def test_equal_floors_fall_back_to_the_lower_floor() -> None:
    assert select_rooms({701, 702, 301, 302}, 2).rooms == (301, 302)


def test_cheaper_window_on_a_later_floor_wins() -> None:
    available = {301, 303, 305, 701, 702, 703}

    result = select_rooms(available, 3)

    assert result.rooms == (701, 702, 703)
    assert result.travel_time == 2


def test_windows_skip_over_gaps_to_the_tightest_cluster() -> None:
    result = select_rooms({401, 402, 406, 407, 408}, 3)

    assert result.rooms == (406, 407, 408)
    assert result.travel_time == 2


# --- Multi-floor fallback ---

def test_fallback_takes_lowest_positions_from_fullest_floors_first() -> None:
    result = select_rooms({801, 802, 803, 201, 202}, 4)

    assert result.rooms == (201, 801, 802, 803)
    assert result.strategy == STRATEGY_MULTI_FLOOR
    assert result.travel_time == total_travel_time({201, 801, 802, 803})


def test_fallback_spans_three_floors() -> None:
    result = select_rooms({101, 102, 205, 206, 1001}, 5)

    assert result.rooms == (101, 102, 205, 206, 1001)
    assert result.travel_time == 30


# --- Helpers ---

def test_group_and_rank_floors() -> None:
    grouped = group_rooms_by_floor([305, 301, 1002, 702, 701, 703])

    assert grouped == {3: [301, 305], 10: [1002], 7: [701, 702, 703]}
    assert rank_floors(grouped) == [7, 3, 10]


# --- Properties ---

def test_input_is_not_mutated() -> None:
    available = [505, 503, 501, 502]
    original = list(available)

    select_rooms(available, 3)

    assert available == original


def test_result_is_independent_of_input_ordering() -> None:
    available = [910, 903, 904, 1001, 1002, 1003, 205, 207]

    assert select_rooms(available, 3) == select_rooms(list(reversed(available)), 3)
    assert select_rooms(available, 3) == select_rooms(set(available), 3)


@pytest.mark.parametrize("seed", range(10))
@pytest.mark.parametrize("count", [1, 2, 3, 4, 5])
def test_result_is_a_subset_of_requested_size(seed: int, count: int) -> None:
    occupied = sample_occupancy(0.6, seed=seed)
    available = [room for room in all_room_identifiers() if room not in occupied]

    result = select_rooms(available, count)

    assert len(result.rooms) == count
    assert len(set(result.rooms)) == count
    assert set(result.rooms) <= set(available)
    assert result.travel_time == total_travel_time(result.rooms)


def test_unknown_tie_break_policy_is_rejected() -> None:
    with pytest.raises(ValueError):
        select_rooms({101, 102}, 2, tie_break="random")


def test_numpy_rooms_and_count_are_accepted() -> None:
    result = select_rooms(np.array([301, 302, 303]), np.int64(2))

    assert result.rooms == (301, 302)
    assert all(type(room) is int for room in result.rooms)
    assert result.travel_time == 1


def test_rooms_filtered_from_a_numpy_array_are_accepted() -> None:
    rooms = np.asarray(all_room_identifiers())
    occupied = sample_occupancy(0.5, seed=7)
    free = rooms[~np.isin(rooms, list(occupied))]

    result = select_rooms(free, 2)

    assert set(result.rooms) <= set(free.tolist())
    assert result.travel_time == total_travel_time(result.rooms)


# --- Service wrapper ---

def test_service_applies_configured_booking_limit(settings) -> None:
    service = RoomAllocationService(replace(settings, max_rooms_per_booking=3))

    assert service.max_rooms_per_booking == 3
    with pytest.raises(InvalidRequestSizeError):
        service.select(all_room_identifiers(), 4)


def test_service_applies_configured_tie_break(settings) -> None:
    service = RoomAllocationService(replace(settings, allocation_tie_break="lexicographic"))

    result = service.select({201, 202, 203, 501, 502, 503, 504}, 3)

    assert result.rooms == (201, 202, 203)
