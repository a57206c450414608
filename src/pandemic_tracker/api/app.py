"""FastAPI application wiring for the tracker."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI

from pandemic_tracker.api import routes
from pandemic_tracker.api.runtime import ApiState, build_state


def create_app(*, state_factory: Callable[[], ApiState] = build_state) -> FastAPI:
    """Instantiate the FastAPI application with routing and lifecycle hooks."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.api_state = state_factory()
        yield

    app = FastAPI(title="Pandemic Tracker API", version="0.1.0", lifespan=lifespan)
    app.include_router(routes.router)
    return app


app = create_app()
