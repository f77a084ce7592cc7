"""FastAPI application factory"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from src.adapter.database import create_engine, create_session_factory, create_tables, seed_clients
from src.api.error import ClientError, client_error_handler, validation_error_handler
from src.api.routes import clients
from src.app.services.client_lock import ClientLockRegistry

logger = logging.getLogger(__name__)


def create_app(config) -> FastAPI:
    """
    Build the API application

    The engine, session factory and per-client lock registry are owned by
    the returned app (app.state) and shared by all requests it serves.
    """
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    engine = create_engine(config.DB_URI, echo=getattr(config, "DB_ECHO", False))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await create_tables(engine)
        if config.SEED_ON_STARTUP:
            async with app.state.session_factory() as session:
                await seed_clients(session, config.SEED_CLIENTS)
        logger.info("Ledger API started")
        yield
        await engine.dispose()
        logger.info("Ledger API stopped")

    app = FastAPI(title="Client Ledger API", lifespan=lifespan)

    app.state.config = config
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.client_locks = ClientLockRegistry()

    if config.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.CORS_ORIGINS,
            allow_credentials=config.CORS_ALLOW_CREDENTIALS,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(ClientError, client_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(clients.router, prefix=config.API_PREFIX)

    return app
