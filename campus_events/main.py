"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers.
Settings are loaded inside create_app() so tests can set env (and clear the
get_settings cache) before calling it.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from campus_events.api.v1 import api_router
from campus_events.core.config import get_settings
from campus_events.core.exception_handlers import register_exception_handlers
from campus_events.core.lifespan import create_lifespan
from campus_events.core.limiter import limiter
from campus_events.infrastructure.external.storage.local_image_store import DEFAULT_PUBLIC_PATH
from campus_events.middleware import RequestIDMiddleware


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    # First added = outermost.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)

    app.include_router(api_router, prefix="/api/v1")

    # Local images are served by the app unless an external base URL fronts them.
    if settings.storage_backend == "local" and not settings.storage_base_url:
        app.mount(
            DEFAULT_PUBLIC_PATH,
            StaticFiles(directory=settings.storage_root, check_dir=False),
            name="event-images",
        )

    return app


app = create_app()
