"""
mvcbasic — FastAPI Application Factory
========================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes logging, middleware, exception mapping, controller
       registration and static resources in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn mvcbasic.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────┐ ┌──────┐ │
    │  │  Req ID  │→│  Logging        │→│ GZip │→│ CORS │ │
    │  └──────────┘ └─────────────────┘ └──────┘ └──────┘ │
    │                                                     │
    │  Controllers:                                       │
    │  log test · mapping · request param/header/body ·   │
    │  response body/view                                 │
    │                                                     │
    │  Static:  / → index.html, /basic/*.html             │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌───────────────────────────────────────────────┐  │
    │  │ Binding→400 │ ViewNotFound→404 │ Serialize→500│  │
    │  └───────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘
"""

import logging
import re
import sys
from pathlib import Path
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from mvcbasic import __version__
from mvcbasic.config import settings
from mvcbasic.exceptions import (
    BindingError,
    MvcBasicError,
    SerializationError,
    ViewNotFoundError,
)
from mvcbasic.middleware.logging import RequestLoggingMiddleware
from mvcbasic.middleware.request_id import RequestIDMiddleware, request_id_var
from mvcbasic.routes import (
    log_test,
    mapping,
    mapping_users,
    request_body_json,
    request_body_string,
    request_header,
    request_param,
    response_body,
    response_view,
)

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Level:  settings.log_level (LOG_LEVEL env var)
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # uvicorn's access log duplicates RequestLoggingMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("mvcbasic %s starting up...", __version__)
    logger.info("Templates: %s", settings.template_dir)
    logger.info("Static resources: %s", settings.static_dir)
    logger.info("Default charset: %s", settings.default_charset)
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_code(exc: Exception) -> str:
    """MissingParameterError → "missing_parameter"."""
    name = re.sub(r"Error$", "", type(exc).__name__)
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map the exception hierarchy to HTTP responses.

    Handler hierarchy:
        BindingError (and subclasses) → 400 Bad Request
        ViewNotFoundError             → 404 Not Found
        SerializationError            → 500 Internal Server Error
        MvcBasicError (base)          → 500 Internal Server Error
        Exception (fallback)          → 500 Internal Server Error

    Binding errors describe the client's own input and are returned with
    their context. Server-side failures only return a generic message.
    """

    @app.exception_handler(BindingError)
    async def handle_binding_error(request: Request, exc: BindingError):
        rid = request_id_var.get("")
        logger.warning("[%s] Binding error on %s: %s", rid, request.url.path, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": error_code(exc),
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(ViewNotFoundError)
    async def handle_view_not_found(request: Request, exc: ViewNotFoundError):
        rid = request_id_var.get("")
        logger.warning("[%s] View not found: %s | Context: %s", rid, exc.view_name, exc.context)
        return JSONResponse(
            status_code=404,
            content={
                "error": "view_not_found",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(SerializationError)
    async def handle_serialization_error(request: Request, exc: SerializationError):
        rid = request_id_var.get("")
        logger.error("[%s] Serialization error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "serialization_error",
                "message": "The response could not be produced.",
                "request_id": rid,
            },
        )

    @app.exception_handler(MvcBasicError)
    async def handle_app_error(request: Request, exc: MvcBasicError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred.",
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Static Resources
# ══════════════════════════════════════════════════════════════════════════

def register_static_resources(app: FastAPI) -> None:
    """
    Serve settings.static_dir without shadowing controller routes.

    "/" returns index.html and every subdirectory is mounted under its own
    name (static/basic → /basic). Nothing is mounted at "/", so a wrong
    method on a controller path still answers 405 instead of 404.
    """
    static_dir = Path(settings.static_dir)
    index = static_dir / "index.html"

    @app.get("/", include_in_schema=False)
    async def index_page() -> FileResponse:
        return FileResponse(index, media_type="text/html")

    for directory in sorted(p for p in static_dir.iterdir() if p.is_dir()):
        app.mount(
            f"/{directory.name}",
            StaticFiles(directory=str(directory), html=True),
            name=f"static-{directory.name}",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="mvcbasic",
        description=(
            "Request mapping, request binding and response rendering examples: "
            "query/form parameters, headers, cookies, text and JSON bodies, "
            "message-body responses and server-rendered views."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in reverse order of addition: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Controllers ──────────────────────────────────────────────
    app.include_router(log_test.router)
    # users before mapping: "/mapping/{user_id}" would claim /mapping/users
    app.include_router(mapping_users.router)
    app.include_router(mapping.router)
    app.include_router(request_param.router)
    app.include_router(request_header.router)
    app.include_router(request_body_string.router)
    app.include_router(request_body_json.router)
    app.include_router(response_body.router)
    app.include_router(response_view.router)

    # ── Static Resources ──────────────────────────────────────────────────
    register_static_resources(app)

    return app


app = create_app()
