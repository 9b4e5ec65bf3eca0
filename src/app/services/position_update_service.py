from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable
from zoneinfo import ZoneInfo

from src.app.ports.output import IBroadcastGateway, IFleetRegistry
from src.app.services.snapshot_service import SnapshotService
from src.domain.exceptions import BusNotFound, InvalidCoordinates
from src.domain.models import GeoPoint, PositionUpdate

logger = logging.getLogger(__name__)

POSITION_UPDATE_EVENT = "bus-position-update"

DEFAULT_TIMEZONE = "America/Sao_Paulo"

# Same layout as a pt-BR locale date/time string: 19/10/2026, 14:03:05
DISPLAY_TIME_FORMAT = "%d/%m/%Y, %H:%M:%S"


@dataclass(frozen=True, slots=True)
class PositionReport:
    position: GeoPoint
    speed: float


def _to_float(value: Any) -> float:
    """Coerce a loosely typed field to float; NaN when it is not a number."""

    if isinstance(value, bool) or value is None:
        return math.nan
    if isinstance(value, str):
        value = value.strip()
    elif not isinstance(value, (int, float)):
        return math.nan
    try:
        return float(value)
    except (ValueError, OverflowError):
        # OverflowError: JSON integers wider than a double.
        return math.nan


def parse_position_report(latitude: Any, longitude: Any, speed: Any) -> PositionReport:
    """Turn raw inbound fields into a typed report.

    Raises InvalidCoordinates for coordinates that are not finite numbers in
    range. A missing, non-numeric or negative speed becomes 0.
    """

    lat = _to_float(latitude)
    lon = _to_float(longitude)
    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise InvalidCoordinates(
            f"Non-numeric coordinates: {latitude!r}, {longitude!r}"
        )
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
        raise InvalidCoordinates(f"Coordinates out of range: {lat}, {lon}")

    spd = _to_float(speed)
    if not math.isfinite(spd) or spd < 0.0:
        spd = 0.0

    return PositionReport(position=GeoPoint(latitude=lat, longitude=lon), speed=spd)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class PositionUpdateService:
    """Validates a telemetry report, applies it and fans out the result.

    Every inbound path (HTTP and websocket) goes through `report_position`.
    The method is synchronous: nothing can interleave between the lookup,
    the mutation and the publish.
    """

    fleet_registry: IFleetRegistry
    broadcast_gateway: IBroadcastGateway
    snapshot_service: SnapshotService | None = None
    clock: Callable[[], datetime] = _utc_now
    display_timezone: ZoneInfo = field(
        default_factory=lambda: ZoneInfo(
            os.getenv("TRACKING_TIMEZONE") or DEFAULT_TIMEZONE
        )
    )

    def __post_init__(self) -> None:
        if self.snapshot_service is None:
            self.snapshot_service = SnapshotService(fleet_registry=self.fleet_registry)

    def report_position(
        self, bus_id: str, latitude: Any, longitude: Any, speed: Any = None
    ) -> PositionUpdate:
        bus = self.fleet_registry.get(bus_id)
        if bus is None:
            raise BusNotFound(bus_id)

        report = parse_position_report(latitude, longitude, speed)

        now = self.clock()
        bus = self.fleet_registry.apply_update(
            bus_id,
            position=report.position,
            speed=report.speed,
            last_update=now.astimezone(self.display_timezone).strftime(
                DISPLAY_TIME_FORMAT
            ),
            last_update_at=now.astimezone(timezone.utc),
        )

        snapshot = self.snapshot_service.compose_one(bus)
        update = PositionUpdate(
            bus_id=bus.id,
            current_position=report.position,
            speed=report.speed,
            distance_to_initial=snapshot.distance_to_initial,
            distance_to_final=snapshot.distance_to_final,
            last_update=snapshot.last_update,
        )

        logger.debug(
            "Position accepted",
            extra={"bus_id": bus.id, "speed": report.speed},
        )
        self.broadcast_gateway.publish(POSITION_UPDATE_EVENT, update.as_payload())
        return update
