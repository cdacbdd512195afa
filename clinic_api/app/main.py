"""
Main entrypoint for the HealthCare+ clinic API.

This module assembles the FastAPI application: it sets up logging,
opens the record store, installs the CORS and error handling layers
and mounts the API router under ``/api``.  The ``create_app`` function
builds and configures the app, which is then instantiated at module
import time as ``app``.  Run it with uvicorn, e.g.::

    uvicorn clinic_api.app.main:app --port 3000

Every response is JSON.  Errors, including unknown routes and
unsupported methods, use the envelope ``{"success": false, "error": ...}``.
"""

import logging
from typing import Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.logging_config import setup_logging
from .core.store import JsonFileStore, RecordStore

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type,Authorization",
    "Access-Control-Allow-Methods": "GET,POST,DELETE,OPTIONS",
}

# Starlette's default details are replaced so that error messages read
# the same as the ones produced by the endpoints.
_DEFAULT_DETAILS = {
    "Not Found": "Not found",
    "Method Not Allowed": "Method not allowed",
}


def error_response(status_code: int, message: str, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message}, headers=headers)


def create_app(store: Optional[RecordStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    store : Optional[RecordStore]
        Store backing the appointment and contact records.  Defaults to
        a ``JsonFileStore`` in ``settings.data_dir``; tests pass a
        ``MemoryStore`` or a store rooted in a temporary directory.
    settings : Optional[Settings]
        Configuration to use instead of the module‑level settings.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.store = store if store is not None else JsonFileStore(settings.data_dir)

    @app.middleware("http")
    async def add_cors_headers(request: Request, call_next):
        # CORS preflight for any path is answered here with an empty body.
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS, media_type="application/json")
        response = await call_next(request)
        for key, value in CORS_HEADERS.items():
            response.headers[key] = value
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = _DEFAULT_DETAILS.get(str(exc.detail), str(exc.detail))
        response = error_response(exc.status_code, message)
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        if any(err.get("type") in {"json_invalid", "value_error.jsondecode"} for err in errors):
            return error_response(400, "Invalid JSON")
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return error_response(400, message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        # Runs outside the CORS middleware, so the headers are added here.
        return error_response(500, "Internal server error", headers=CORS_HEADERS)

    app.include_router(api_router, prefix="/api")

    logger.info("Clinic API ready, data directory: %s", getattr(app.state.store, "data_dir", "<memory>"))
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
