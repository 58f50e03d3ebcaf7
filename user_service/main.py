"""FastAPI application - User Service.

User CRUD over HTTP with asynchronous domain events:
- users API under /api/v1
- `user.created` / `user.updated` published after each committed write
- health probes under /health

Composition root: the lifespan builds the engine, session factory and event
publisher, and hands them to presentation.api.dependencies.

Run:
    uvicorn user_service.main:app --reload
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from user_service.config import get_logger, get_settings, setup_logging
from user_service.infrastructure.messaging import create_event_publisher
from user_service.infrastructure.persistence.sqlalchemy import (
    Base,
    create_engine,
    create_session_factory,
)
from user_service.presentation.api import dependencies
from user_service.presentation.api.exception_handlers import register_exception_handlers
from user_service.presentation.api.health import router as health_router
from user_service.presentation.api.middleware import RequestContextMiddleware
from user_service.presentation.api.v1.routes import users_router

settings = get_settings()

setup_logging()
logger = get_logger(__name__)

API_V1_PREFIX = "/api/v1"


# ============================================================================
# LIFESPAN
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: engine → (dev) create tables → publisher → dependencies.

    Shutdown: drop dependencies, dispose the pool.
    """
    logger.info(
        "application.startup.started",
        environment=settings.environment,
        database=settings.database_url,
    )

    engine = create_engine(settings)
    app.state.engine = engine

    # Alembic owns the schema outside development
    if settings.is_development and settings.db_create_tables:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("application.database.tables_created")

    dependencies.init_dependencies(
        session_factory=create_session_factory(engine),
        event_publisher=create_event_publisher(settings),
    )

    logger.info(
        "application.startup.completed",
        event_publisher=settings.event_publisher_backend,
        event_queues=settings.event_queues,
    )

    yield

    logger.info("application.shutdown.started")

    dependencies.reset_dependencies()
    await engine.dispose()

    logger.info("application.shutdown.completed")


# ============================================================================
# APPLICATION
# ============================================================================


app = FastAPI(
    title=settings.app_name,
    description="""
    User CRUD service з асинхронними domain events.

    ## Features
    - Create / read / partial update / delete / list users
    - Idempotent PATCH (no-op updates publish nothing)
    - `user.created` / `user.updated` events with field-level change records

    ## Architecture
    - **Domain Layer**: User aggregate, validators, change records
    - **Application Layer**: UserService, event handlers
    - **Infrastructure Layer**: SQLAlchemy, Celery event publisher, Event Bus
    - **Presentation Layer**: FastAPI REST API, Celery workers
    """,
    version=settings.version,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    openapi_url="/openapi.json" if settings.debug else None,
    lifespan=lifespan,
)

# Last added runs first: CORS wraps request context
app.add_middleware(RequestContextMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(health_router)
app.include_router(users_router, prefix=API_V1_PREFIX)


@app.get("/", tags=["Root"], summary="API root")
async def root() -> dict:
    """Service info + links."""
    return {
        "message": settings.app_name,
        "version": settings.version,
        "docs": "/docs",
        "health": "/health",
        "users": f"{API_V1_PREFIX}/users",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "user_service.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info",
    )
