from __future__ import annotations

from dataclasses import dataclass

from src.app.ports.output import IFleetRegistry
from src.domain.algorithms.geo_utils import distance, estimated_travel_time
from src.domain.models import Bus, DerivedSnapshot, Direction, RouteLegMetric


@dataclass(slots=True)
class SnapshotService:
    """Builds the externally visible view of the fleet.

    Reads registry state as of the call and never mutates it.
    """

    fleet_registry: IFleetRegistry

    def compose_one(self, bus: Bus) -> DerivedSnapshot:
        to_initial: float | None = None
        to_final: float | None = None
        if bus.current_position is not None:
            to_initial = distance(bus.current_position, bus.initial_point)
            to_final = distance(bus.current_position, bus.final_point)

        return DerivedSnapshot(
            id=bus.id,
            name=bus.name,
            route=bus.route,
            initial_point=bus.initial_point,
            final_point=bus.final_point,
            current_position=bus.current_position,
            speed=bus.speed,
            last_update=bus.last_update,
            distance_to_initial=to_initial,
            distance_to_final=to_final,
        )

    def compose_all(self) -> tuple[DerivedSnapshot, ...]:
        return tuple(self.compose_one(bus) for bus in self.fleet_registry.all())

    def route_leg_metric(self, bus: Bus, direction: Direction) -> RouteLegMetric:
        if bus.current_position is None:
            return RouteLegMetric(direction=direction)

        target = (
            bus.final_point if direction is Direction.TO_FINAL else bus.initial_point
        )
        distance_km = distance(bus.current_position, target)
        return RouteLegMetric(
            direction=direction,
            distance_km=distance_km,
            estimated_time=estimated_travel_time(distance_km, bus.speed or 0.0),
        )
