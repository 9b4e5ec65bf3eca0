from __future__ import annotations

from fastapi.responses import JSONResponse

from src.adapters.api.schemas.tracking import (
    BusSnapshotSchema,
    ErrorResponseSchema,
    GeoPointSchema,
)
from src.domain.exceptions import BusNotFound, InvalidCoordinates, TrackingError
from src.domain.models import DerivedSnapshot, GeoPoint

BUS_NOT_FOUND_MESSAGE = "Ônibus não encontrado"
INVALID_COORDINATES_MESSAGE = "Coordenadas inválidas"


def point_to_schema(p: GeoPoint) -> GeoPointSchema:
    return GeoPointSchema(latitude=p.latitude, longitude=p.longitude)


def snapshot_to_schema(s: DerivedSnapshot) -> BusSnapshotSchema:
    return BusSnapshotSchema(
        id=s.id,
        name=s.name,
        route=s.route,
        initial_point=point_to_schema(s.initial_point),
        final_point=point_to_schema(s.final_point),
        current_position=(
            point_to_schema(s.current_position) if s.current_position else None
        ),
        speed=s.speed,
        last_update=s.last_update,
        distance_to_initial=s.distance_to_initial,
        distance_to_final=s.distance_to_final,
    )


def error_response(exc: TrackingError) -> JSONResponse:
    if isinstance(exc, BusNotFound):
        status_code, message = 404, BUS_NOT_FOUND_MESSAGE
    elif isinstance(exc, InvalidCoordinates):
        status_code, message = 400, INVALID_COORDINATES_MESSAGE
    else:
        status_code, message = 400, str(exc)
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponseSchema(message=message).model_dump(by_alias=True),
    )
