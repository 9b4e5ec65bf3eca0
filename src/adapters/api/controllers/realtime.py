from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from src.adapters.api.dependencies import (
    get_broadcast_gateway,
    get_position_update_service,
)
from src.adapters.api.schemas.tracking import PushLocationUpdateSchema
from src.adapters.realtime.websocket_broadcast_gateway import WebSocketBroadcastGateway
from src.app.services.position_update_service import PositionUpdateService
from src.domain.exceptions import TrackingError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["realtime"])

LOCATION_UPDATE_EVENT = "bus-location-update"


def handle_push_message(service: PositionUpdateService, message: object) -> bool:
    """Apply one inbound websocket message; return False if it was dropped.

    There is no acknowledgment channel, so rejected messages are only logged.
    """

    if not isinstance(message, dict) or message.get("event") != LOCATION_UPDATE_EVENT:
        logger.warning("Ignoring unsupported push message")
        return False

    try:
        body = PushLocationUpdateSchema.model_validate(message.get("data"))
        service.report_position(body.bus_id, body.latitude, body.longitude, body.speed)
    except (ValidationError, TrackingError) as exc:
        logger.warning("Dropping push location update: %s", exc)
        return False
    return True


@router.websocket("/ws")
async def tracking_socket(
    websocket: WebSocket,
    gateway: WebSocketBroadcastGateway = Depends(get_broadcast_gateway),
    service: PositionUpdateService = Depends(get_position_update_service),
) -> None:
    conn = await gateway.connect(websocket)
    sender = asyncio.create_task(gateway.pump(conn))
    try:
        while True:
            try:
                message = await websocket.receive_json()
            except (ValueError, KeyError, TypeError):
                # KeyError/TypeError: binary frame, receive_json expects text.
                logger.warning("Dropping malformed push message")
                continue
            handle_push_message(service, message)
    except WebSocketDisconnect:
        pass
    finally:
        gateway.disconnect(conn)
        sender.cancel()
