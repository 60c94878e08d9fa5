"""Environment-driven application settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from backend.domain.constraints import DEFAULT_MAX_ROOMS_PER_BOOKING


TIE_BREAK_POLICIES = ("first_minimum", "lexicographic")


@dataclass(frozen=True)
class Settings:
    app_name: str = "Hotel Room Reservation Core"
    app_version: str = "1.0.0"
    log_level: str = "INFO"

    # Allocation
    max_rooms_per_booking: int = DEFAULT_MAX_ROOMS_PER_BOOKING
    allocation_tie_break: str = "first_minimum"

    # Occupancy sampling
    default_occupancy_probability: float = 0.3
    occupancy_random_seed: Optional[int] = None
    initial_occupancy_on_startup: bool = True


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def validate_settings(settings: Settings) -> None:
    if settings.max_rooms_per_booking < 1:
        raise ValueError("max_rooms_per_booking must be >= 1")
    if settings.allocation_tie_break not in TIE_BREAK_POLICIES:
        raise ValueError(
            f"allocation_tie_break must be one of {', '.join(TIE_BREAK_POLICIES)}"
        )
    if not 0.0 <= settings.default_occupancy_probability <= 1.0:
        raise ValueError("default_occupancy_probability must be between 0 and 1")
    if settings.occupancy_random_seed is not None and settings.occupancy_random_seed < 0:
        raise ValueError("occupancy_random_seed must be >= 0")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build settings from environment variables once per process."""
    defaults = Settings()
    settings = Settings(
        app_name=os.getenv("APP_NAME", defaults.app_name),
        app_version=os.getenv("APP_VERSION", defaults.app_version),
        log_level=os.getenv("LOG_LEVEL", defaults.log_level),
        max_rooms_per_booking=_env_int(
            "MAX_ROOMS_PER_BOOKING", defaults.max_rooms_per_booking
        ),
        allocation_tie_break=os.getenv(
            "ALLOCATION_TIE_BREAK", defaults.allocation_tie_break
        ).strip().lower(),
        default_occupancy_probability=_env_float(
            "DEFAULT_OCCUPANCY_PROBABILITY", defaults.default_occupancy_probability
        ),
        occupancy_random_seed=_env_int(
            "OCCUPANCY_RANDOM_SEED", defaults.occupancy_random_seed
        ),
        initial_occupancy_on_startup=_env_bool(
            "INITIAL_OCCUPANCY_ON_STARTUP", defaults.initial_occupancy_on_startup
        ),
    )
    validate_settings(settings)
    return settings
