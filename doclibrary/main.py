"""ASGI entry point for the document library API (`uvicorn doclibrary.main:app`).

create_app() reads settings when called, not at import, so the Supabase
environment can be set first. Use cases are built per request by the
dependency getters in doclibrary.api.v1.dependencies.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from doclibrary.api.v1.router import api_router
from doclibrary.core.config import get_settings
from doclibrary.core.exception_handlers import register_exception_handlers
from doclibrary.core.lifespan import create_lifespan
from doclibrary.core.limiter import limiter
from doclibrary.middleware import RequestIDMiddleware, RequestSizeLimitMiddleware


def create_app() -> FastAPI:
    """Assemble the app: lifespan, rate limiter, error handlers, middleware, /api/v1 routes."""
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

    # Middleware: first added = innermost. Order outermost first: size limit → request ID → CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)
    app.add_middleware(RequestSizeLimitMiddleware, max_bytes=settings.max_upload_size)

    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()
