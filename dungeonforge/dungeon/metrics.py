"""
project: Dungeon Forge
module: metrics.py
License: MIT
"""

from typing import Dict


def init_metrics() -> Dict[str, int | float | dict]:
    return {
        "rooms": 0,
        "leaves": 0,
        "corridors": 0,
        "tiles_floor": 0,
        "tiles_wall": 0,
        "placements_made": 0,
        "placements_skipped": 0,
        "runtime_ms": 0.0,
        "phase_ms": {},
    }
