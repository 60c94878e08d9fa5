"""
main.py — Launch the hotel room reservation API with uvicorn.

    python main.py

The banner lists the booking limit, tie-break policy and startup occupancy
read from the environment (``MAX_ROOMS_PER_BOOKING``,
``ALLOCATION_TIE_BREAK``, ``INITIAL_OCCUPANCY_ON_STARTUP``) so a misconfigured
process is visible before the first request. Routes such as ``/rooms``,
``/bookings/optimal`` and ``/travel-time`` are documented under ``/docs``.

Direct uvicorn usage:
    uvicorn app:app --reload
"""

from __future__ import annotations

import uvicorn

from backend.domain.building import FLOOR_COUNT, TOTAL_ROOMS
from backend.utils.config import get_settings


HOST = "127.0.0.1"
PORT = 8000


def main() -> None:
    settings = get_settings()
    print("=" * 60)
    print(f"  {settings.app_name} v{settings.app_version}")
    print("=" * 60)
    print(f"  Building     : {FLOOR_COUNT} floors, {TOTAL_ROOMS} rooms")
    print(f"  Booking limit: {settings.max_rooms_per_booking} rooms")
    print(f"  Tie-break    : {settings.allocation_tie_break}")
    if settings.initial_occupancy_on_startup:
        print(f"  Occupancy    : random, p={settings.default_occupancy_probability}")
    else:
        print("  Occupancy    : empty")
    print(f"  API docs     : http://{HOST}:{PORT}/docs")
    print("=" * 60)

    uvicorn.run(
        "app:app",
        host=HOST,
        port=PORT,
        reload=True,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
