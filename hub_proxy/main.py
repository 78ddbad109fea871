"""FastAPI application entrypoint for the hub proxy."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import logging

from fastapi import FastAPI

from hub_proxy.api.routes import router as hub_router
from hub_proxy.core.config import get_settings
from hub_proxy.core.errors import register_error_handlers
from hub_proxy.hub.client import get_hub_client
from hub_proxy.schemas.envelope import RootResponse

logger = logging.getLogger(__name__)

DOCS_MESSAGE = "hello world, docs: https://github.com/vinliao/hub-proxy"


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    logger.info("Starting hub proxy with settings=%s", get_settings().safe_for_logging())
    hub_client = get_hub_client()
    yield
    hub_client.close()
    get_hub_client.cache_clear()


app = FastAPI(title="Hub Proxy", lifespan=lifespan)
register_error_handlers(app)
app.include_router(hub_router)


@app.get("/", response_model=RootResponse)
def root() -> RootResponse:
    """Liveness check that also points at the docs."""
    return RootResponse(message=DOCS_MESSAGE)
