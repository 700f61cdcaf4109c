# key_registry/main.py

import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine

from key_registry.api import email_lookup, users
from key_registry.api.error_handlers import register_error_handlers
from key_registry.infra.postgres import build_engine, build_session_factory, check_connection
from key_registry.utils.logger import setup_logger

logger = logging.getLogger(__name__)


def create_app(engine: Engine | None = None) -> FastAPI:
    """
    Build the API. The engine (and its connection pool) is created once at
    startup unless one is passed in, then shared by every request through
    app.state.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_engine = engine is None
        app_engine = build_engine() if owns_engine else engine
        check_connection(app_engine)
        app.state.engine = app_engine
        app.state.session_factory = build_session_factory(app_engine)
        logger.info("Key registry started")
        yield
        if owns_engine:
            app_engine.dispose()
        logger.info("Key registry shutting down")

    app = FastAPI(
        title="Key Registry",
        version="1.0.0",
        description="Email to aggregated public key registry",
        lifespan=lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Register routers
    app.include_router(email_lookup.router, tags=["Email"])
    app.include_router(users.router, tags=["Users"])

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    return app


def run():
    """Console entry point: serve the API with uvicorn."""
    setup_logger()
    uvicorn.run(
        "key_registry.main:create_app",
        factory=True,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8003")),
        log_config=None,
    )


if __name__ == "__main__":
    run()
