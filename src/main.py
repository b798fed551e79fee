"""
Production FastAPI Application

    granian --interface asgi src.main:app
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.db_setting import create_db_and_tables, dispose_engines, get_engine
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    Logger.base.info('🚀 [Cinema] Starting up...')

    tracing = TracingConfig(service_name='cinema-reservation')
    tracing.setup()
    Logger.base.info('📊 [Cinema] OpenTelemetry tracing configured')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Cinema] Dependency injection wired')

    tracing.instrument_sqlalchemy(engine=get_engine())
    Logger.base.info('🗄️  [Cinema] Database engine ready + instrumented')

    # PostgreSQL schema is owned by alembic; SQLite (dev) is created on the fly
    if settings.IS_SQLITE:
        await create_db_and_tables()
        Logger.base.info('🧱 [Cinema] SQLite schema ensured')

    Logger.base.info('✅ [Cinema] Ready to serve requests')

    yield

    Logger.base.info('🛑 [Cinema] Shutting down...')

    await dispose_engines()
    Logger.base.info('🗄️  [Cinema] Database engine disposed')

    tracing.shutdown()
    container.unwire()

    Logger.base.info('👋 [Cinema] Shutdown complete')


app = create_app(
    lifespan=lifespan,
    description='Cinema Reservation System - showtime scheduling, seat booking and hall seat maps',
)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
