#!/usr/bin/env python3
"""Validate local room-reservation environment readiness."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backend.domain.building import TOTAL_ROOMS, all_room_identifiers
from backend.domain.travel_time import total_travel_time
from backend.services.allocation_service import select_rooms
from backend.services.occupancy_service import sample_occupancy
from backend.utils.config import get_settings

SEPARATOR_LINE = "=" * 44


def _print_result(name: str, success: bool, detail: str = "") -> tuple[bool, str]:
    if success:
        return True, f"[PASS] {name}{detail}"
    return False, f"[FAIL] {name}: {detail}"


def main() -> int:
    results: list[str] = []
    all_passed = True

    # CHECK 1 — Python version >= 3.10
    if sys.version_info >= (3, 10):
        ok, line = _print_result("Python " + sys.version.split()[0], True)
    else:
        ok, line = _print_result(
            "Python version >= 3.10",
            False,
            f"found {sys.version.split()[0]}",
        )
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 2 — Required packages importable
    package_names = ["fastapi", "uvicorn", "pydantic", "numpy", "pandas", "httpx", "pytest"]
    import_errors: list[str] = []
    for module_name in package_names:
        try:
            importlib.import_module(module_name)
        except Exception as exc:  # pragma: no cover - runtime guard
            import_errors.append(f"{module_name} ({exc})")
    if import_errors:
        ok, line = _print_result(
            "Required packages",
            False,
            "missing/unimportable -> " + "; ".join(import_errors),
        )
    else:
        ok, line = _print_result("Required packages: all importable", True)
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 3 — Settings load from environment
    try:
        settings = get_settings()
        ok, line = _print_result(
            "Settings",
            True,
            f": max_rooms_per_booking={settings.max_rooms_per_booking} "
            f"tie_break={settings.allocation_tie_break}",
        )
    except Exception as exc:
        ok, line = _print_result("Settings", False, str(exc))
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 4 — Building topology
    try:
        rooms = all_room_identifiers()
        if len(rooms) != TOTAL_ROOMS or len(set(rooms)) != TOTAL_ROOMS:
            raise RuntimeError(f"expected {TOTAL_ROOMS} distinct rooms, got {len(rooms)}")
        ok, line = _print_result(f"Building topology: {TOTAL_ROOMS} rooms", True)
    except Exception as exc:
        ok, line = _print_result("Building topology", False, str(exc))
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 5 — Allocation reference scenarios
    try:
        same_floor = select_rooms(range(301, 311), 3)
        if same_floor.rooms != (301, 302, 303) or same_floor.travel_time != 2:
            raise RuntimeError(f"same-floor scenario returned {same_floor}")
        cross_floor = select_rooms({101, 1001}, 2)
        if set(cross_floor.rooms) != {101, 1001} or total_travel_time(cross_floor.rooms) != 18:
            raise RuntimeError(f"cross-floor scenario returned {cross_floor}")
        ok, line = _print_result("Allocation scenarios", True)
    except Exception as exc:
        ok, line = _print_result("Allocation scenarios", False, str(exc))
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 6 — Occupancy sampling bounds
    try:
        if sample_occupancy(0.0) or len(sample_occupancy(1.0)) != TOTAL_ROOMS:
            raise RuntimeError("probability bounds not honoured")
        sampled = sample_occupancy(0.3, seed=7)
        ok, line = _print_result("Occupancy sampling", True, f": {len(sampled)} occupied at p=0.3")
    except Exception as exc:
        ok, line = _print_result("Occupancy sampling", False, str(exc))
    results.append(line)
    all_passed = all_passed and ok

    print(SEPARATOR_LINE)
    print(" Room Reservation Environment Validation")
    print(SEPARATOR_LINE)
    for line in results:
        print(f" {line}")
    print(SEPARATOR_LINE)
    if all_passed:
        print(" All checks passed. Environment is ready.")
        print(SEPARATOR_LINE)
        return 0
    print(" One or more checks failed.")
    print(SEPARATOR_LINE)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
