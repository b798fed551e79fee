"""
Test Configuration and Fixtures

This module provides:
- A test database per test session (per xdist worker): PostgreSQL when
  POSTGRES_SERVER is exported, otherwise a throwaway SQLite file
- Schema reset around every integration test
- DI wiring, an ASGI HTTP client and bearer-token helpers
- Service fixtures (imported from fixture_loader.py)

Architecture:
- Unit tests (test/**/unit/, marked `unit`): mocks only, no database
- Integration tests: real repositories, Unit of Work and HTTP API. Row locks
  (SELECT ... FOR UPDATE) are only exercised on PostgreSQL; SQLite serializes
  writers with BEGIN IMMEDIATE instead.

Run against PostgreSQL:
    POSTGRES_SERVER=localhost POSTGRES_PASSWORD=postgres pytest
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are read at import time (src.platform.config.core_setting)
# =============================================================================
import os
from pathlib import Path
import tempfile


def _postgres_test_url(worker_id: str) -> str:
    db_name = 'cinema_reservation_test_db'
    if worker_id != 'master':
        db_name = f'{db_name}_{worker_id}'
    os.environ['POSTGRES_DB'] = db_name
    user = os.environ.get('POSTGRES_USER', 'postgres')
    password = os.environ.get('POSTGRES_PASSWORD', 'postgres')
    host = os.environ['POSTGRES_SERVER']
    port = os.environ.get('POSTGRES_PORT', '5432')
    return f'postgresql+asyncpg://{user}:{password}@{host}:{port}/{db_name}'


def _early_setup_test_environment() -> None:
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    if os.environ.get('POSTGRES_SERVER'):
        # Explicit URL so a DATABASE_URL in .env cannot point the suite elsewhere
        os.environ['DATABASE_URL'] = _postgres_test_url(worker_id)
    else:
        db_dir = Path(tempfile.mkdtemp(prefix=f'cinema_test_{worker_id}_'))
        os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{db_dir / "cinema_test.db"}'

    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ['SECRET_KEY'] = 'test-secret-key-for-cinema-reservation-suite'
    os.environ.setdefault('TRANSACTION_RETRY_BASE_DELAY', '0.01')
    os.environ.setdefault('DB_POOL_SIZE', '5')
    os.environ.setdefault('DB_POOL_MAX_OVERFLOW', '10')


_early_setup_test_environment()

import asyncio  # noqa: E402
from collections.abc import AsyncGenerator, Generator  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import text  # noqa: E402
from sqlalchemy.engine import make_url  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402

from src.platform.config.core_setting import settings  # noqa: E402
from src.platform.config.di import container  # noqa: E402
from src.platform.config.wire_modules import WIRE_MODULES  # noqa: E402
from src.platform.database.db_setting import (  # noqa: E402
    create_db_and_tables,
    dispose_engines,
    drop_db_and_tables,
)


# =============================================================================
# Pytest Hooks
# =============================================================================
def _is_unit_test_only_run(config: pytest.Config) -> bool:
    markexpr = config.getoption('markexpr', default='')
    if markexpr and 'unit' in str(markexpr) and 'not unit' not in str(markexpr):
        return True

    args = config.args or []
    test_paths = [arg for arg in args if arg and not arg.startswith('-')]
    return bool(test_paths and all('/unit/' in path or '\\unit\\' in path for path in test_paths))


def pytest_sessionstart(session: pytest.Session) -> None:
    if settings.IS_SQLITE or _is_unit_test_only_run(session.config):
        return
    asyncio.run(_ensure_postgres_test_database())


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        markers = [m.name for m in item.iter_markers()]
        if 'unit' not in markers and 'clean_database' not in item.fixturenames:
            # First, so catalog fixtures find the tables
            item.fixturenames.insert(0, 'clean_database')


# =============================================================================
# Database Setup
# =============================================================================
async def _ensure_postgres_test_database() -> None:
    url = make_url(settings.DATABASE_URL_ASYNC)
    admin_engine = create_async_engine(
        url.set(database='postgres'), isolation_level='AUTOCOMMIT'
    )
    try:
        async with admin_engine.connect() as conn:
            result = await conn.execute(
                text('SELECT 1 FROM pg_database WHERE datname = :name'), {'name': url.database}
            )
            if not result.fetchone():
                await conn.execute(text(f'CREATE DATABASE "{url.database}"'))
    finally:
        await admin_engine.dispose()


# =============================================================================
# Database Fixtures
# =============================================================================
@pytest.fixture(scope='function')
async def clean_database() -> AsyncGenerator[None, None]:
    await drop_db_and_tables()
    await create_db_and_tables()
    yield
    # The engine is bound to this test's event loop
    await dispose_engines()


# =============================================================================
# Session-scoped Fixtures
# =============================================================================
@pytest.fixture(scope='session', autouse=True)
def wire_container() -> Generator[None, None, None]:
    container.wire(modules=WIRE_MODULES)
    yield
    container.unwire()


@pytest.fixture
async def client() -> AsyncGenerator[httpx.AsyncClient, None]:
    from test.test_main import app

    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url='http://test') as test_client:
        yield test_client


# =============================================================================
# Load service fixtures
# =============================================================================
from test.fixture_loader import *  # noqa: E402, F401, F403
