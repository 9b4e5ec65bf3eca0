from __future__ import annotations

import logging
import os
from typing import Any

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.adapters.api.controllers.buses import router as buses_router
from src.adapters.api.controllers.realtime import router as realtime_router
from src.adapters.api.controllers.tracking import router as tracking_router
from src.adapters.api.dependencies import (
    build_broadcast_gateway,
    build_fleet_registry,
    get_broadcast_gateway,
)
from src.adapters.realtime.websocket_broadcast_gateway import WebSocketBroadcastGateway

DEFAULT_PORT = 3000


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Ensure API errors are JSON so the tracking page can display them."""

    logging.getLogger("uvicorn.error").exception(
        "Unhandled exception", extra={"path": str(request.url.path)}
    )

    reveal = (os.getenv("TRACKING_REVEAL_ERRORS") or "").strip().lower() in {
        "1",
        "true",
        "yes",
        "on",
    }

    if reveal:
        detail = str(exc) or exc.__class__.__name__
    else:
        detail = "Internal Server Error"

    return JSONResponse(status_code=500, content={"detail": detail})


def create_app() -> FastAPI:
    """Build the app together with the fleet state it owns.

    The registry and broadcast gateway are created here once and live on
    `app.state` for the lifetime of the process.
    """

    app = FastAPI(title="Shuttle Tracker")
    app.state.fleet_registry = build_fleet_registry()
    app.state.broadcast_gateway = build_broadcast_gateway()

    raw_origins = os.getenv("CORS_ALLOW_ORIGINS") or "*"
    origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.include_router(buses_router)
    app.include_router(tracking_router)
    app.include_router(realtime_router)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.get("/health")
    def health(
        gateway: WebSocketBroadcastGateway = Depends(get_broadcast_gateway),
    ) -> dict[str, Any]:
        return {"status": "ok", "broadcast": gateway.get_stats()}

    return app


app = create_app()


def run() -> None:
    port = int(os.getenv("PORT") or DEFAULT_PORT)
    host = os.getenv("HOST") or "0.0.0.0"
    logging.getLogger("uvicorn.error").info("Listening on http://%s:%s", host, port)
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run()
