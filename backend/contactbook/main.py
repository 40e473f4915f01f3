"""Contact Book API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ContactBookError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - The store handle is acquired once in the lifespan and kept on app.state;
      if the store cannot be reached at startup the lifespan raises and the
      server refuses to start

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from contactbook.api.error_handlers import register_error_handlers
from contactbook.api.routes import contacts, groups, health, root
from contactbook.config import get_settings
from contactbook.core.errors import StoreUnavailableError
from contactbook.infrastructure.database import init_db
from contactbook.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    db_manager = init_db(
        settings.resolved_database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    try:
        await db_manager.connect(
            max_retries=settings.store_connect_max_retries,
            base_delay_ms=settings.store_connect_base_delay_ms,
            max_delay_ms=settings.store_connect_max_delay_ms,
        )
    except StoreUnavailableError:
        logger.critical("Store unreachable at startup, refusing to serve")
        await db_manager.dispose()
        raise
    app.state.db_manager = db_manager
    logger.info(f"Contact Book API started on port {settings.port}")
    yield
    logger.info("Contact Book API shutting down")
    await db_manager.dispose()
    app.state.db_manager = None


app = FastAPI(
    title="Contact Book API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.state.settings = settings

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes: explicit registration
app.include_router(root.router)
app.include_router(health.router)
app.include_router(contacts.router)
app.include_router(groups.router)

register_error_handlers(app)
