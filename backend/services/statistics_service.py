"""Occupancy statistics per floor and for the whole building."""

from __future__ import annotations

import pandas as pd

from backend.domain.building import FLOOR_COUNT, TOTAL_ROOMS, all_room_identifiers, floor_capacity, floor_of
from backend.domain.models import FloorSummary, InventorySnapshot, InventorySummary


_STATUS_COLUMNS = ["available", "occupied", "booked"]


def build_status_frame(snapshot: InventorySnapshot) -> pd.DataFrame:
    """One row per room with its floor and status."""
    rows = []
    for room in all_room_identifiers():
        if room in snapshot.occupied:
            status = "occupied"
        elif room in snapshot.booked:
            status = "booked"
        else:
            status = "available"
        rows.append({"room": room, "floor": floor_of(room), "status": status})
    return pd.DataFrame(rows, columns=["room", "floor", "status"])


def floor_statistics(snapshot: InventorySnapshot) -> pd.DataFrame:
    frame = build_status_frame(snapshot)
    counts = (
        pd.crosstab(frame["floor"], frame["status"])
        .reindex(index=range(1, FLOOR_COUNT + 1), columns=_STATUS_COLUMNS, fill_value=0)
        .astype(int)
    )
    counts["capacity"] = [floor_capacity(floor) for floor in counts.index]
    counts["occupancy_rate"] = (counts["occupied"] + counts["booked"]) / counts["capacity"]
    counts.index.name = "floor"
    return counts.reset_index()[["floor", "capacity", *_STATUS_COLUMNS, "occupancy_rate"]]


def summarize_inventory(snapshot: InventorySnapshot) -> InventorySummary:
    table = floor_statistics(snapshot)
    floors = [
        FloorSummary(
            floor=int(row.floor),
            capacity=int(row.capacity),
            available=int(row.available),
            occupied=int(row.occupied),
            booked=int(row.booked),
            occupancy_rate=float(row.occupancy_rate),
        )
        for row in table.itertuples(index=False)
    ]
    occupied = len(snapshot.occupied)
    booked = len(snapshot.booked)
    return InventorySummary(
        total_rooms=TOTAL_ROOMS,
        available=TOTAL_ROOMS - occupied - booked,
        occupied=occupied,
        booked=booked,
        occupancy_rate=(occupied + booked) / TOTAL_ROOMS,
        floors=floors,
    )
