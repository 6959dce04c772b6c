"""
Repository adapters for read-once network snapshots.
"""

from src.trip_planner.adapters.repositories.network_snapshot import (
    NetworkSnapshot,
    OriginIndex,
    build_origin_index,
)

__all__ = [
    "NetworkSnapshot",
    "OriginIndex",
    "build_origin_index",
]
