from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from api.integrations import router as integrations_router
from common.connections.store import ConnectionStore


logger = logging.getLogger(__name__)


def create_app(store: Optional[ConnectionStore] = None) -> FastAPI:
    """Build the API app; the store is loaded on startup and flushed on shutdown."""
    store = store or ConnectionStore.from_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.connection_store = store.init()
        logger.info("Connection store ready (%d connection(s))", len(store.list_connections()))
        try:
            yield
        finally:
            store.teardown()

    app = FastAPI(title="Integrations", lifespan=lifespan)
    app.state.connection_store = store
    app.include_router(integrations_router)
    return app
