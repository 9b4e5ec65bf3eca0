from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse

from src.adapters.api.controllers._responses import error_response, snapshot_to_schema
from src.adapters.api.dependencies import (
    get_position_update_service,
    get_snapshot_service,
)
from src.adapters.api.schemas.tracking import (
    BusListResponseSchema,
    ErrorResponseSchema,
    LocationReportSchema,
    LocationUpdateResponseSchema,
    PositionUpdateSchema,
    RouteLegMetricResponseSchema,
    RouteLegMetricSchema,
)
from src.app.services.position_update_service import PositionUpdateService
from src.app.services.snapshot_service import SnapshotService
from src.domain.algorithms.geo_utils import format_travel_time
from src.domain.exceptions import BusNotFound, TrackingError
from src.domain.models import Direction

router = APIRouter(prefix="/api/tracking", tags=["tracking"])

_ERRORS = {
    400: {"model": ErrorResponseSchema},
    404: {"model": ErrorResponseSchema},
}


# Handlers are `async def` so they run on the event loop thread: the
# update-then-broadcast step must not race other updates from a threadpool.
@router.post(
    "/{bus_id}/location",
    response_model=LocationUpdateResponseSchema,
    responses=_ERRORS,
)
async def update_location(
    bus_id: str,
    body: Any = Body(default=None),
    service: PositionUpdateService = Depends(get_position_update_service),
) -> LocationUpdateResponseSchema | JSONResponse:
    # A missing or non-object body is treated as a report with no fields, so
    # it fails coordinate validation like any other bad report.
    req = (
        LocationReportSchema.model_validate(body)
        if isinstance(body, dict)
        else LocationReportSchema()
    )
    try:
        update = service.report_position(
            bus_id, req.latitude, req.longitude, req.speed
        )
    except TrackingError as exc:
        return error_response(exc)

    return LocationUpdateResponseSchema(
        message="Localização atualizada",
        data=PositionUpdateSchema.model_validate(update.as_payload()),
    )


@router.get("/all", response_model=BusListResponseSchema)
async def list_all_positions(
    service: SnapshotService = Depends(get_snapshot_service),
) -> BusListResponseSchema:
    return BusListResponseSchema(
        data=[snapshot_to_schema(s) for s in service.compose_all()]
    )


@router.get(
    "/{bus_id}/eta",
    response_model=RouteLegMetricResponseSchema,
    responses={404: {"model": ErrorResponseSchema}},
)
async def get_route_leg_metric(
    bus_id: str,
    direction: Direction = Query(default=Direction.TO_FINAL),
    service: SnapshotService = Depends(get_snapshot_service),
) -> RouteLegMetricResponseSchema | JSONResponse:
    bus = service.fleet_registry.get(bus_id)
    if bus is None:
        return error_response(BusNotFound(bus_id))

    metric = service.route_leg_metric(bus, direction)
    minutes = (
        round(metric.estimated_time.total_seconds() / 60.0, 1)
        if metric.estimated_time is not None
        else None
    )
    return RouteLegMetricResponseSchema(
        data=RouteLegMetricSchema(
            bus_id=bus.id,
            direction=metric.direction.value,
            distance=metric.distance_km,
            estimated_time=format_travel_time(metric.estimated_time),
            estimated_minutes=minutes,
        )
    )
