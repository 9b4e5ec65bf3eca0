from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelSchema(BaseModel):
    # Existing clients speak camelCase.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GeoPointSchema(CamelSchema):
    latitude: float
    longitude: float


class BusSnapshotSchema(CamelSchema):
    id: str
    name: str
    route: str
    initial_point: GeoPointSchema
    final_point: GeoPointSchema
    current_position: GeoPointSchema | None = None
    speed: float = 0.0
    last_update: str | None = None
    distance_to_initial: float | None = None
    distance_to_final: float | None = None


class BusListResponseSchema(CamelSchema):
    success: Literal[True] = True
    data: list[BusSnapshotSchema]


class LocationReportSchema(CamelSchema):
    """Inbound telemetry; values may arrive as numbers or numeric strings."""

    latitude: Any = None
    longitude: Any = None
    speed: Any = None


class PositionUpdateSchema(CamelSchema):
    bus_id: str
    current_position: GeoPointSchema
    speed: float
    distance_to_initial: float
    distance_to_final: float
    last_update: str


class LocationUpdateResponseSchema(CamelSchema):
    success: Literal[True] = True
    message: str
    data: PositionUpdateSchema


class RouteLegMetricSchema(CamelSchema):
    bus_id: str
    direction: Literal["toFinal", "toInitial"]
    distance: float | None = None
    estimated_time: str
    estimated_minutes: float | None = None


class RouteLegMetricResponseSchema(CamelSchema):
    success: Literal[True] = True
    data: RouteLegMetricSchema


class ErrorResponseSchema(CamelSchema):
    success: Literal[False] = False
    message: str


class PushLocationUpdateSchema(CamelSchema):
    """Body of an inbound `bus-location-update` websocket event."""

    bus_id: str
    latitude: Any = None
    longitude: Any = None
    speed: Any = None
