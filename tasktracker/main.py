"""Mock record store application entrypoint.

Serves ``/tasks`` and ``/users`` with json-server semantics from memory::

    uvicorn tasktracker.main:app --port 3001
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from tasktracker import __version__
from tasktracker.core.config import get_settings
from tasktracker.errors import TrackerError
from tasktracker.repositories.memory import InMemoryStore
from tasktracker.routes import records_router

logger = logging.getLogger(__name__)


def create_app(store: InMemoryStore | None = None) -> FastAPI:
    app = FastAPI(title="Task Tracker Record Store", version=__version__)
    if store is None:
        seed_path = get_settings().seed_path
        store = InMemoryStore.from_seed_file(seed_path) if seed_path else InMemoryStore()
        if seed_path:
            logger.info("store.seeded path=%s", seed_path)
    app.state.store = store

    @app.exception_handler(TrackerError)
    async def handle_tracker_error(_, exc: TrackerError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.payload.model_dump(mode="json", exclude_none=True),
        )

    app.include_router(records_router)
    return app


app = create_app()
