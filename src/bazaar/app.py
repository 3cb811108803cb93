"""Bazaar FastAPI application.

Every request runs inside the bazaar domain context, so handlers reach the
repositories and the unit of work through ``current_domain``.

Usage:
    uvicorn bazaar.app:create_app --factory --host 0.0.0.0 --port 8000 --reload
"""

import os
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import create_health_router, register_exception_handlers

from bazaar.api import routers
from bazaar.api.errors import register_error_handlers
from bazaar.domain import bazaar
from bazaar.utils.logging import add_context, clear_context, configure_logging, get_logger

logger = get_logger(__name__)


def _cors_origins() -> list[str]:
    raw = os.getenv("BAZAAR_CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def create_app(initialize: bool = True) -> FastAPI:
    """Build the API. Pass ``initialize=False`` when the domain is already initialized."""
    if initialize:
        configure_logging()
        bazaar.init()

    app = FastAPI(
        title="Bazaar API",
        description="Local-commerce marketplace: catalog, cart, checkout, delivery and reviews",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the bazaar domain context and bind request details to the log context."""
        add_context(
            request_id=request.headers.get("X-Request-ID") or str(uuid.uuid4()),
            method=request.method,
            path=request.url.path,
        )
        try:
            with bazaar.domain_context():
                return await call_next(request)
        finally:
            clear_context()

    register_exception_handlers(app)
    register_error_handlers(app)

    for router in routers:
        app.include_router(router)
    app.include_router(create_health_router(bazaar))

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": bazaar.name})

    logger.info("app_created", routes=len(app.routes))
    return app
