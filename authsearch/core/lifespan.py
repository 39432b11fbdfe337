"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring: logging and the shared outbound
HTTP client used by the search engine and permission backend clients.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from authsearch.core.config import get_settings
from authsearch.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit close the shared HTTP client."""
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    app.state.http_client = httpx.AsyncClient(timeout=settings.http_timeout_seconds)
    logger.info(
        "Search gateway started (permissions %s, %d document type(s))",
        "enabled" if settings.search_permissions_enabled else "disabled",
        len(settings.document_types()),
    )

    yield

    # ---- Shutdown ----
    await app.state.http_client.aclose()
