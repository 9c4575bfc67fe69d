"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers.
See app.core.lifespan and app.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and
clear the get_settings cache) before importing or calling create_app().
Run with: uvicorn app.main:app
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.router import api_router
from app.core.config import get_settings
from app.core.exception_handlers import register_exception_handlers
from app.core.lifespan import create_lifespan
from app.core.limiter import limiter
from app.middleware import RequestIDMiddleware, TimeoutMiddleware

OPENAPI_TAGS = [
    {"name": "tasks", "description": "Tasks and cross-team assistance requests"},
    {"name": "teams", "description": "Teams and per-team task statistics"},
    {"name": "profiles", "description": "Caller profile, permissions and roles"},
    {"name": "health", "description": "Liveness and readiness probes"},
]


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Team task tracking: tasks, assistance requests, team statistics.",
        debug=settings.debug,
        lifespan=create_lifespan,
        openapi_tags=OPENAPI_TAGS,
    )

    # slowapi reads the limiter from app.state; 429s use the common error shape.
    app.state.limiter = limiter
    register_exception_handlers(app)

    # Last added = outermost: timeout wraps request ID, which wraps CORS.
    origins = [o.strip() for o in settings.allowed_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", settings.request_id_header],
        expose_headers=[settings.request_id_header],
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)
    app.add_middleware(TimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)

    app.include_router(api_router, prefix="/api/v1")
    return app


app = create_app()
