from __future__ import annotations

from fastapi import APIRouter, Depends

from src.adapters.api.controllers._responses import snapshot_to_schema
from src.adapters.api.dependencies import get_snapshot_service
from src.adapters.api.schemas.tracking import BusListResponseSchema
from src.app.services.snapshot_service import SnapshotService

router = APIRouter(prefix="/api", tags=["buses"])


@router.get("/buses", response_model=BusListResponseSchema)
async def list_buses(
    service: SnapshotService = Depends(get_snapshot_service),
) -> BusListResponseSchema:
    return BusListResponseSchema(
        data=[snapshot_to_schema(s) for s in service.compose_all()]
    )
