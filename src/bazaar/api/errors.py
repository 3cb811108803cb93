"""HTTP mapping for the errors Protean's handlers do not cover.

``register_exception_handlers`` from Protean already maps validation (400),
missing objects (404) and invalid state (409). This module adds 401, 403 and
a generic 500 that logs the failure and hides its detail.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from bazaar.shared.exceptions import AuthError, ForbiddenError, InternalError

logger = structlog.get_logger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AuthError)
    async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
        return JSONResponse(
            status_code=401,
            content={"error": str(exc)},
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(ForbiddenError)
    async def forbidden_handler(request: Request, exc: ForbiddenError) -> JSONResponse:
        return JSONResponse(status_code=403, content={"error": str(exc)})

    @app.exception_handler(InternalError)
    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled_error", path=request.url.path, method=request.method, error_type=type(exc).__name__)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})
