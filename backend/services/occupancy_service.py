"""Random occupancy snapshots for demos and exercising the allocation engine."""

from __future__ import annotations

from typing import Optional

import numpy as np

from backend.domain.building import all_room_identifiers
from backend.domain.constraints import validate_probability
from backend.utils.logger import get_logger


logger = get_logger(__name__)


DEFAULT_OCCUPANCY_PROBABILITY = 0.3


def sample_occupancy(
    probability: float = DEFAULT_OCCUPANCY_PROBABILITY,
    *,
    seed: Optional[int] = None,
) -> frozenset[int]:
    """Mark each room occupied by an independent Bernoulli trial.

    Probabilities outside [0, 1] raise ``InvalidProbabilityError``; they are
    never clamped. ``seed`` makes the draw reproducible.
    """
    value = validate_probability(probability)
    rooms = np.asarray(all_room_identifiers())
    rng = np.random.default_rng(seed)
    # random() draws from [0, 1), so 0 marks nothing and 1 marks everything
    draws = rng.random(rooms.size)
    occupied = frozenset(int(room) for room in rooms[draws < value])
    logger.debug(
        "Occupancy sampled | probability=%.3f | occupied=%s",
        value,
        len(occupied),
    )
    return occupied
