"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of infrastructure (Supabase client,
shared outbound HTTP client).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from doclibrary.core.config import get_settings
from doclibrary.infrastructure.supabase.client import close_supabase, init_supabase
from doclibrary.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, Supabase client, shared HTTP client for the
    payment backend and download proxy. Shutdown closes them in reverse.
    """
    settings = get_settings()

    # ---- Startup ----
    setup_logging()
    init_supabase(settings)
    # Shared HTTP client for the payment backend and download proxy (connection reuse).
    app.state.http_client = httpx.AsyncClient(timeout=settings.http_timeout_seconds)
    logger.info("%s %s started", settings.app_name, settings.app_version)

    yield

    # ---- Shutdown ----
    if getattr(app.state, "http_client", None) is not None:
        await app.state.http_client.aclose()
        app.state.http_client = None
        logger.info("Outbound HTTP client closed")

    await close_supabase()
