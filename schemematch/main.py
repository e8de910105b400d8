"""FastAPI application entry point — wires everything together.

Usage:
    python -m schemematch.main

Services are built once per application in ``create_app`` and handed to
request handlers through ``app.state``; nothing is a module-level singleton
except the ``app`` uvicorn serves.
"""

from __future__ import annotations

import logging
import sys
import weakref
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from schemematch import __version__
from schemematch.api.routes import router
from schemematch.audit import audit_on_event
from schemematch.config import Settings, settings as default_settings
from schemematch.db.engine import Database
from schemematch.eligibility import EligibilityEvaluator
from schemematch.events import EventBus
from schemematch.exceptions import DuplicateProfileError, NotFoundError, TransientStoreError
from schemematch.schemas.events import EventType, SystemEvent
from schemematch.store.memory import InMemoryStore

logger = logging.getLogger(__name__)


# ── Logging setup ────────────────────────────────────────────────────


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
        stream=sys.stdout,
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


# ── Error handlers ───────────────────────────────────────────────────


async def _not_found(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


async def _conflict(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=409, content={"detail": str(exc)})


async def _store_unavailable(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Store unavailable on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Storage temporarily unavailable"})


# ── Application factory ──────────────────────────────────────────────


def create_app(app_settings: Settings | None = None, store: InMemoryStore | None = None) -> FastAPI:
    """Build the FastAPI app.

    Args:
        app_settings: Defaults to settings loaded from the environment.
        store: In-memory store to use instead of a fresh one. Ignored with
            the SQL backend.
    """
    cfg = app_settings or default_settings
    use_sql = cfg.db.store_backend == "sql"
    seed = store is None and cfg.db.seed_sample_schemes

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application startup and shutdown lifecycle."""
        logger.info("Starting %s (env=%s, store=%s)", cfg.app_name, cfg.environment, cfg.db.store_backend)
        events: EventBus = app.state.events

        # 1. Event system — audit logging is always active
        events.subscribe(audit_on_event)
        await events.start()

        # 2. Store
        database: Database | None = app.state.database
        if database is not None:
            await database.init()
        elif seed:
            await app.state.store.seed_sample_schemes()

        await events.emit(SystemEvent(event_type=EventType.SYSTEM_STARTUP, source_module="main"))

        try:
            yield
        finally:
            logger.info("Shutting down %s...", cfg.app_name)
            await events.emit(SystemEvent(event_type=EventType.SYSTEM_SHUTDOWN, source_module="main"))
            await events.stop()
            events.unsubscribe(audit_on_event)
            if database is not None:
                await database.close()
                logger.info("Database closed")

        logger.info("%s shutdown complete", cfg.app_name)

    app = FastAPI(
        title=f"{cfg.app_name} API",
        description="Welfare scheme eligibility scoring and recommendations",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = cfg
    app.state.events = EventBus()
    app.state.evaluator = EligibilityEvaluator(threshold=cfg.recommendations.eligibility_threshold)
    app.state.user_locks = weakref.WeakValueDictionary()
    app.state.database = Database(cfg) if use_sql else None
    app.state.store = None if use_sql else (store if store is not None else InMemoryStore())

    app.add_exception_handler(NotFoundError, _not_found)
    app.add_exception_handler(DuplicateProfileError, _conflict)
    app.add_exception_handler(TransientStoreError, _store_unavailable)
    app.include_router(router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {
            "status": "ok",
            "environment": cfg.environment,
            "store": cfg.db.store_backend,
        }

    return app


configure_logging(default_settings.log_level)
app = create_app()


# ── Entry point ──────────────────────────────────────────────────────

if __name__ == "__main__":
    uvicorn.run(
        "schemematch.main:app",
        host="0.0.0.0",
        port=8000,
        reload=default_settings.environment == "development",
        log_level=default_settings.log_level.lower(),
    )
