"""
OrderHub — FastAPI Application Factory
=======================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Served by uvicorn (`orderhub.main:app`, see orderhub.server).

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌──────┐ ┌──────────────┐ ┌────────┐ ┌────────────┐     │
    │  │ CORS │→│ Sec. Headers │→│ Req ID │→│ Access Log │     │
    │  └──────┘ └──────────────┘ └────────┘ └────────────┘     │
    │                                                          │
    │  Routes:                                                 │
    │  /users  /sessions  /deliveries  /delivery-logs  /health │
    │  /  (Swagger UI)    /openapi.json                        │
    │                                                          │
    │  Exception Handlers:                                     │
    │  ┌────────────────────────────────────────────────────┐  │
    │  │ Validation→400 │ AppError→status │ anything→500    │  │
    │  └────────────────────────────────────────────────────┘  │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging, configuration check (warn only)
    Shutdown: dispose database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from orderhub import __version__
from orderhub.config import settings
from orderhub.database import dispose_engine
from orderhub.docs.openapi import API_DESCRIPTION, API_TITLE, install_openapi
from orderhub.exceptions import AppError, DatabaseError, ValidationError
from orderhub.middleware.logging import RequestLoggingMiddleware
from orderhub.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, get_request_id
from orderhub.middleware.security_headers import SECURITY_HEADERS, SecurityHeadersMiddleware
from orderhub.routes import deliveries, delivery_logs, health, sessions, users
from orderhub.schemas.common import format_validation_issues

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "Internal server error"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T10:30:00 [INFO] orderhub.access: POST /users 201 ...
    Level comes from LOG_LEVEL. Output goes to stdout.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our own access log replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("OrderHub %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Development defaults are allowed; the server still starts
        logger.warning("%s", str(e))

    logger.info("API docs: http://localhost:%d/", settings.port)

    yield

    logger.info("OrderHub shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _cors_headers(request: Request) -> Dict[str, str]:
    """The headers CORSMiddleware would add to a simple response for this request."""
    origin = request.headers.get("origin")
    if not origin:
        return {}
    allowed = settings.cors_origins_list
    if "*" in allowed:
        headers = {"Access-Control-Allow-Origin": "*"}
    elif origin in allowed:
        headers = {
            "Access-Control-Allow-Origin": origin,
            "Access-Control-Allow-Credentials": "true",
            "Vary": "Origin",
        }
    else:
        return {}
    headers["Access-Control-Expose-Headers"] = REQUEST_ID_HEADER
    return headers


def _server_error_response(rid: str, extra_headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    headers = dict(SECURITY_HEADERS)
    if rid:
        headers[REQUEST_ID_HEADER] = rid
    if extra_headers:
        headers.update(extra_headers)
    return JSONResponse(
        status_code=500,
        content={"message": SERVER_ERROR_MESSAGE},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to the three error bodies the API documents.

    Handler hierarchy:
        RequestValidationError → 400 ValidationError {message, issues}
        ValidationError        → 400 ValidationError {message, issues}
        AppError (+subclasses) → exc.status_code AppError {message}
        HTTPException          → exc.status_code AppError {message}
        DatabaseError          → 500 ServerError {message}
        Exception (fallback)   → 500 ServerError {message}

    Internal details (stack traces, SQL, context dicts) are logged, never returned.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        issues = format_validation_issues(exc.errors())
        logger.warning(
            "[%s] Validation failed on %s: %s",
            get_request_id(request),
            request.url.path,
            ", ".join(i["field"] for i in issues),
        )
        return JSONResponse(
            status_code=400,
            content={"message": ValidationError().message, "issues": issues},
        )

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", get_request_id(request), exc.issues)
        return JSONResponse(
            status_code=400,
            content={"message": exc.message, "issues": exc.issues},
        )

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError):
        rid = get_request_id(request)
        logger.info("[%s] %d %s | Context: %s", rid, exc.status_code, exc.message, exc.context)
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        """Unknown routes (404) and wrong methods (405) use the AppError body too."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = get_request_id(request)
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return _server_error_response(rid)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = get_request_id(request)
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        # Handled by ServerErrorMiddleware, outside every other middleware
        return _server_error_response(rid, _cors_headers(request))


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Swagger UI is served at `/` and the document at `/openapi.json`;
    the document itself is assembled by orderhub.docs.openapi.
    """
    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=__version__,
        docs_url="/",
        redoc_url=None,
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in REVERSE order of addition: CORS runs first.
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials="*" not in settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )

    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(users.router)
    app.include_router(sessions.router)
    app.include_router(deliveries.router)
    app.include_router(delivery_logs.router)
    app.include_router(health.router)

    install_openapi(app)

    return app


app = create_app()
