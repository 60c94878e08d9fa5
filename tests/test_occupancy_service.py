from __future__ import annotations

import math

import pytest

from backend.domain.building import all_room_identifiers
from backend.domain.constraints import InvalidProbabilityError
from backend.services.occupancy_service import sample_occupancy


def test_zero_probability_occupies_nothing() -> None:
    assert sample_occupancy(0) == frozenset()


def test_full_probability_occupies_every_room() -> None:
    assert sample_occupancy(1) == frozenset(all_room_identifiers())


@pytest.mark.parametrize("probability", [-0.01, 1.01, math.nan, math.inf, "0.5", None, True])
def test_out_of_range_probability_is_rejected(probability) -> None:
    with pytest.raises(InvalidProbabilityError):
        sample_occupancy(probability)


def test_same_seed_gives_same_snapshot() -> None:
    assert sample_occupancy(0.4, seed=11) == sample_occupancy(0.4, seed=11)


def test_sample_is_a_subset_of_the_building() -> None:
    assert sample_occupancy(0.5, seed=3) <= frozenset(all_room_identifiers())


def test_average_occupancy_tracks_probability() -> None:
    sizes = [len(sample_occupancy(0.3, seed=seed)) for seed in range(200)]

    assert 25 <= sum(sizes) / len(sizes) <= 33
