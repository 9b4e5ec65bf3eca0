from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable

from src.app.ports.output import IFleetRegistry
from src.domain.models import Bus, GeoPoint

FCA_UNICAMP = GeoPoint(latitude=-22.5565835, longitude=-47.4216307)
ESPACO_RODEIO = GeoPoint(latitude=-22.619852, longitude=-47.377685)

FCA_RODEIO_ROUTE = "FCA UNICAMP → Espaço Rodeio → FCA UNICAMP"


def build_default_fleet() -> tuple[Bus, ...]:
    """The fleet the service starts with; ids and termini are fixed."""

    return tuple(
        Bus(
            id=f"bus-{n:03d}",
            name=f"Linha FCA ↔ Rodeio {n:03d}",
            route=FCA_RODEIO_ROUTE,
            initial_point=FCA_UNICAMP,
            final_point=ESPACO_RODEIO,
        )
        for n in (1, 2)
    )


@dataclass(slots=True)
class InMemoryFleetRegistry(IFleetRegistry):
    """Dict-backed registry; lives as long as the process.

    Key set is fixed at construction. Dict insertion order is the
    registration order returned by `all()`.
    """

    _buses: dict[str, Bus] = field(default_factory=dict)

    @classmethod
    def from_buses(cls, buses: Iterable[Bus]) -> InMemoryFleetRegistry:
        registry = cls()
        for bus in buses:
            if bus.id in registry._buses:
                raise ValueError(f"Duplicate bus id: {bus.id}")
            registry._buses[bus.id] = bus
        return registry

    @classmethod
    def with_default_fleet(cls) -> InMemoryFleetRegistry:
        return cls.from_buses(build_default_fleet())

    def get(self, bus_id: str) -> Bus | None:
        return self._buses.get(bus_id)

    def all(self) -> tuple[Bus, ...]:
        return tuple(self._buses.values())

    def apply_update(
        self,
        bus_id: str,
        *,
        position: GeoPoint,
        speed: float,
        last_update: str,
        last_update_at: datetime,
    ) -> Bus:
        bus = self._buses[bus_id]
        bus.current_position = position
        bus.speed = speed
        bus.last_update = last_update
        bus.last_update_at = last_update_at
        return bus
