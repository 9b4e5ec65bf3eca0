from __future__ import annotations

from fastapi import Depends
from fastapi.requests import HTTPConnection

from src.adapters.persistence.in_memory_fleet_registry import InMemoryFleetRegistry
from src.adapters.realtime.websocket_broadcast_gateway import WebSocketBroadcastGateway
from src.app.ports.output import IFleetRegistry
from src.app.services.position_update_service import PositionUpdateService
from src.app.services.snapshot_service import SnapshotService


def get_fleet_registry(conn: HTTPConnection) -> IFleetRegistry:
    return conn.app.state.fleet_registry


def get_broadcast_gateway(conn: HTTPConnection) -> WebSocketBroadcastGateway:
    return conn.app.state.broadcast_gateway


def get_snapshot_service(
    registry: IFleetRegistry = Depends(get_fleet_registry),
) -> SnapshotService:
    return SnapshotService(fleet_registry=registry)


def get_position_update_service(
    registry: IFleetRegistry = Depends(get_fleet_registry),
    gateway: WebSocketBroadcastGateway = Depends(get_broadcast_gateway),
    snapshots: SnapshotService = Depends(get_snapshot_service),
) -> PositionUpdateService:
    return PositionUpdateService(
        fleet_registry=registry,
        broadcast_gateway=gateway,
        snapshot_service=snapshots,
    )


def build_fleet_registry() -> InMemoryFleetRegistry:
    return InMemoryFleetRegistry.with_default_fleet()


def build_broadcast_gateway() -> WebSocketBroadcastGateway:
    return WebSocketBroadcastGateway()
