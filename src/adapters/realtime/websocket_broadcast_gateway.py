from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from itertools import count
from typing import Any, Mapping

from fastapi import WebSocket

from src.app.ports.output import IBroadcastGateway

logger = logging.getLogger(__name__)

DEFAULT_OUTBOX_SIZE = 256


@dataclass(slots=True)
class ObserverConnection:
    connection_id: int
    websocket: WebSocket
    outbox: asyncio.Queue[dict[str, Any]]


@dataclass(slots=True)
class WebSocketBroadcastGateway(IBroadcastGateway):
    """Fans events out to every connected websocket observer.

    `publish` only enqueues onto each observer's outbox; `pump` (one task per
    connection) drains it, so a slow client never stalls the update path.
    Outboxes are bounded: when one is full the oldest queued event is
    discarded. Observers whose socket fails are dropped.
    """

    outbox_size: int = DEFAULT_OUTBOX_SIZE
    _connections: dict[int, ObserverConnection] = field(default_factory=dict)
    _ids: count = field(default_factory=lambda: count(1))
    _total_messages_sent: int = 0
    _total_messages_dropped: int = 0

    @property
    def active_connections(self) -> int:
        return len(self._connections)

    async def connect(self, websocket: WebSocket) -> ObserverConnection:
        # Registered before the handshake completes so no update is missed.
        conn = ObserverConnection(
            connection_id=next(self._ids),
            websocket=websocket,
            outbox=asyncio.Queue(maxsize=self.outbox_size),
        )
        self._connections[conn.connection_id] = conn
        try:
            await websocket.accept()
        except Exception:
            self._connections.pop(conn.connection_id, None)
            raise
        logger.info(
            "Observer connected",
            extra={
                "connection_id": conn.connection_id,
                "active": self.active_connections,
            },
        )
        return conn

    def disconnect(self, conn: ObserverConnection) -> None:
        if self._connections.pop(conn.connection_id, None) is not None:
            logger.info(
                "Observer disconnected",
                extra={
                    "connection_id": conn.connection_id,
                    "active": self.active_connections,
                },
            )

    def publish(self, event: str, payload: Mapping[str, Any]) -> None:
        message = {"event": event, "data": dict(payload)}
        for conn in self._connections.values():
            if conn.outbox.full():
                conn.outbox.get_nowait()
                self._total_messages_dropped += 1
                logger.warning(
                    "Observer outbox full, dropping oldest event",
                    extra={"connection_id": conn.connection_id},
                )
            conn.outbox.put_nowait(message)

    async def pump(self, conn: ObserverConnection) -> None:
        """Send queued messages to one observer until it goes away."""

        while True:
            message = await conn.outbox.get()
            try:
                await conn.websocket.send_json(message)
            except Exception:
                logger.warning(
                    "Dropping observer after failed send",
                    extra={"connection_id": conn.connection_id},
                )
                self.disconnect(conn)
                return
            self._total_messages_sent += 1

    def get_stats(self) -> dict[str, int]:
        return {
            "active_connections": self.active_connections,
            "total_messages_sent": self._total_messages_sent,
            "total_messages_dropped": self._total_messages_dropped,
        }
