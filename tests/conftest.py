from __future__ import annotations

from dataclasses import replace

import pytest

from backend.utils.config import Settings, get_settings


@pytest.fixture
def settings() -> Settings:
    get_settings.cache_clear()
    return replace(
        get_settings(),
        max_rooms_per_booking=5,
        allocation_tie_break="first_minimum",
        default_occupancy_probability=0.3,
        occupancy_random_seed=None,
        initial_occupancy_on_startup=False,
    )
