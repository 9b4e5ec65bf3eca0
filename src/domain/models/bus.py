from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .geo import GeoPoint


@dataclass(slots=True)
class Bus:
    """A shuttle on a fixed round-trip route.

    `name`, `route` and the two termini never change after startup. The live
    fields (`current_position`, `last_update`, `last_update_at`) are either
    all set or all unset; only the fleet registry writes them.

    `last_update` is the pt-BR display string shown to riders.
    `last_update_at` is the UTC instant of the same update, for ordering.
    """

    id: str
    name: str
    route: str
    initial_point: GeoPoint
    final_point: GeoPoint
    current_position: GeoPoint | None = None
    speed: float = 0.0
    last_update: str | None = None
    last_update_at: datetime | None = None
