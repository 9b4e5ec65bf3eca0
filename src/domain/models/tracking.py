from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Any

from .geo import GeoPoint


class Direction(str, Enum):
    TO_FINAL = "toFinal"
    TO_INITIAL = "toInitial"


@dataclass(frozen=True, slots=True)
class DerivedSnapshot:
    """Externally visible view of one bus at a point in time."""

    id: str
    name: str
    route: str
    initial_point: GeoPoint
    final_point: GeoPoint
    current_position: GeoPoint | None
    speed: float
    last_update: str | None
    distance_to_initial: float | None = None
    distance_to_final: float | None = None


@dataclass(frozen=True, slots=True)
class PositionUpdate:
    """Result of one accepted position report.

    The same instance feeds the broadcast and the synchronous reply.
    """

    bus_id: str
    current_position: GeoPoint
    speed: float
    distance_to_initial: float
    distance_to_final: float
    last_update: str

    def as_payload(self) -> dict[str, Any]:
        return {
            "busId": self.bus_id,
            "currentPosition": self.current_position.as_dict(),
            "speed": self.speed,
            "distanceToInitial": self.distance_to_initial,
            "distanceToFinal": self.distance_to_final,
            "lastUpdate": self.last_update,
        }


@dataclass(frozen=True, slots=True)
class RouteLegMetric:
    direction: Direction
    distance_km: float | None = None
    # None means the travel time cannot be estimated.
    estimated_time: timedelta | None = None

    @property
    def is_indeterminate(self) -> bool:
        return self.estimated_time is None
