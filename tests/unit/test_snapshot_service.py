from __future__ import annotations

from datetime import datetime, timezone

from src.adapters.persistence.in_memory_fleet_registry import InMemoryFleetRegistry
from src.app.services.snapshot_service import SnapshotService
from src.domain.algorithms.geo_utils import distance, estimated_travel_time
from src.domain.models import Direction, GeoPoint

AT = datetime(2026, 1, 8, 11, 0, tzinfo=timezone.utc)


def _move(
    registry: InMemoryFleetRegistry, bus_id: str, lat: float, lon: float, speed: float
) -> None:
    registry.apply_update(
        bus_id,
        position=GeoPoint(latitude=lat, longitude=lon),
        speed=speed,
        last_update="08/01/2026, 08:00:00",
        last_update_at=AT,
    )


def test_compose_one_without_telemetry_has_no_distances() -> None:
    registry = InMemoryFleetRegistry.with_default_fleet()
    svc = SnapshotService(fleet_registry=registry)

    snap = svc.compose_one(registry.get("bus-001"))

    assert snap.current_position is None
    assert snap.distance_to_initial is None
    assert snap.distance_to_final is None
    assert snap.speed == 0.0
    assert snap.last_update is None


def test_compose_one_with_position_adds_distances() -> None:
    registry = InMemoryFleetRegistry.with_default_fleet()
    _move(registry, "bus-001", -22.58, -47.40, 40.0)
    svc = SnapshotService(fleet_registry=registry)

    bus = registry.get("bus-001")
    snap = svc.compose_one(bus)

    assert snap.distance_to_initial == distance(bus.current_position, bus.initial_point)
    assert snap.distance_to_final == distance(bus.current_position, bus.final_point)
    assert snap.name == bus.name
    assert snap.route == bus.route


def test_compose_all_keeps_registry_order_regardless_of_update_order() -> None:
    registry = InMemoryFleetRegistry.with_default_fleet()
    _move(registry, "bus-002", -22.6, -47.39, 10.0)
    _move(registry, "bus-001", -22.58, -47.40, 40.0)
    svc = SnapshotService(fleet_registry=registry)

    assert [s.id for s in svc.compose_all()] == ["bus-001", "bus-002"]


def test_compose_does_not_mutate_registry() -> None:
    registry = InMemoryFleetRegistry.with_default_fleet()
    svc = SnapshotService(fleet_registry=registry)

    svc.compose_all()

    assert all(b.current_position is None for b in registry.all())


def test_route_leg_metric_without_position_is_indeterminate() -> None:
    registry = InMemoryFleetRegistry.with_default_fleet()
    svc = SnapshotService(fleet_registry=registry)

    metric = svc.route_leg_metric(registry.get("bus-001"), Direction.TO_FINAL)

    assert metric.distance_km is None
    assert metric.estimated_time is None
    assert metric.is_indeterminate


def test_route_leg_metric_picks_terminus_by_direction() -> None:
    registry = InMemoryFleetRegistry.with_default_fleet()
    _move(registry, "bus-001", -22.58, -47.40, 40.0)
    svc = SnapshotService(fleet_registry=registry)
    bus = registry.get("bus-001")

    to_final = svc.route_leg_metric(bus, Direction.TO_FINAL)
    to_initial = svc.route_leg_metric(bus, Direction.TO_INITIAL)

    assert to_final.distance_km == distance(bus.current_position, bus.final_point)
    assert to_initial.distance_km == distance(bus.current_position, bus.initial_point)
    assert to_final.estimated_time == estimated_travel_time(to_final.distance_km, 40.0)


def test_route_leg_metric_stopped_bus_has_distance_but_no_time() -> None:
    registry = InMemoryFleetRegistry.with_default_fleet()
    _move(registry, "bus-001", -22.58, -47.40, 0.0)
    svc = SnapshotService(fleet_registry=registry)

    metric = svc.route_leg_metric(registry.get("bus-001"), Direction.TO_INITIAL)

    assert metric.distance_km is not None
    assert metric.is_indeterminate
