"""
FastAPI application factory for the headroom twin.

Exposes the three core operations over HTTP:

- ``GET  /api/state``    current hall snapshot
- ``POST /api/refresh``  regenerate the snapshot and return it
- ``POST /api/simulate`` project a setpoint change against the snapshot

The application owns one ``HallStateStore``, created at startup (or
injected by the caller) and kept on ``app.state.store``. Categories are
always computed by the core; this layer only validates input and
serialises results.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from headroom_twin import __version__
from headroom_twin.api.schemas import SimulateRequest
from headroom_twin.control.state_store import HallStateStore

logger = logging.getLogger(__name__)


def _bad_request(detail: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": "Bad Request", "detail": detail})


def create_app(store: HallStateStore | None = None) -> FastAPI:
    """
    Construct the headroom twin API.

    Parameters
    ----------
    store : HallStateStore | None
        Store to serve. A store for the reference hall is created when
        omitted.

    Returns
    -------
    FastAPI
        The configured ASGI application.
    """
    app = FastAPI(
        title="Headroom Twin API",
        description="Rack thermal risk and setpoint what-if simulation",
        version=__version__,
    )
    app.state.store = store or HallStateStore()

    # -----------------------------------------------------------------------
    # Exception Handlers
    # -----------------------------------------------------------------------
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _bad_request(str(exc))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "detail": str(exc),
                "path": request.url.path,
            },
        )

    # -----------------------------------------------------------------------
    # Routes
    # -----------------------------------------------------------------------
    @app.get("/api/state", tags=["Hall"])
    async def get_state() -> dict[str, Any]:
        return app.state.store.current.to_dict()

    @app.post("/api/refresh", tags=["Hall"])
    async def refresh_state() -> dict[str, Any]:
        return app.state.store.refresh().to_dict()

    @app.post("/api/simulate", tags=["Hall"], response_model=None)
    async def simulate_change(request: Request) -> Any:
        raw = await request.body()
        try:
            payload = json.loads(raw) if raw.strip() else {}
        except (UnicodeDecodeError, json.JSONDecodeError):
            return _bad_request("Invalid JSON body")
        if not isinstance(payload, dict):
            return _bad_request("JSON body must be an object")
        try:
            body = SimulateRequest.model_validate(payload)
        except ValidationError as exc:
            return _bad_request(str(exc))
        return app.state.store.simulate(body.delta).to_dict()

    @app.get("/health", tags=["System"])
    async def health_check() -> dict[str, str]:
        """Simple liveness check."""
        return {"status": "ok", "version": __version__}

    return app


__all__ = ["create_app"]
