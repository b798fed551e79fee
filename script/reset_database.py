#!/usr/bin/env python3
"""
Database Reset Script
Reset the database structure

Features:
1. PostgreSQL - drop & recreate the database, then run Alembic migrations
2. SQLite - drop and recreate every table from the ORM metadata

Notes:
- This script only resets database structure, does not seed data
- To seed data, run `python script/seed_data.py`
"""

import asyncio
import os
import subprocess
import time

from sqlalchemy import create_engine, text

from src.platform.config.core_setting import settings
from src.platform.constant.path import ALEMBIC_INI_PATH, BASE_DIR
from src.platform.database.db_setting import (
    create_db_and_tables,
    dispose_engines,
    drop_db_and_tables,
)

DB_WAIT_SECONDS = 1


def _parse_db_connection(sync_url: str) -> tuple[str, str]:
    """Parse database URL and return (server_url, db_name)"""
    db_name = sync_url.split('/')[-1]
    server_url = sync_url.rsplit('/', 1)[0]
    return server_url, db_name


def _drop_and_create_db(server_url: str, db_name: str) -> None:
    admin_engine = create_engine(f'{server_url}/postgres', isolation_level='AUTOCOMMIT')

    try:
        with admin_engine.connect() as conn:
            conn.execute(
                text(
                    'SELECT pg_terminate_backend(pid) FROM pg_stat_activity '
                    'WHERE datname = :db_name AND pid <> pg_backend_pid()'
                ),
                {'db_name': db_name},
            )

            conn.execute(text(f'DROP DATABASE IF EXISTS "{db_name}"'))
            print(f"   ✅ Database '{db_name}' dropped")
            time.sleep(DB_WAIT_SECONDS)

            conn.execute(text(f'CREATE DATABASE "{db_name}"'))
            print(f"   ✅ Database '{db_name}' created")
            time.sleep(DB_WAIT_SECONDS)
    finally:
        admin_engine.dispose()


def _run_alembic_migrations() -> None:
    print("   🔄 Running 'alembic upgrade head'...")

    result = subprocess.run(
        ['alembic', '-c', str(ALEMBIC_INI_PATH), 'upgrade', 'head'],
        cwd=BASE_DIR,
        capture_output=True,
        text=True,
        env=os.environ.copy(),
    )

    if result.returncode != 0:
        print(f'   ❌ Migration failed (return code: {result.returncode})')
        if result.stdout:
            print(f'   📋 STDOUT: {result.stdout}')
        if result.stderr:
            print(f'   📋 STDERR: {result.stderr}')
        raise RuntimeError(f'Alembic migration failed with return code {result.returncode}')

    print('   ✅ Database migrations completed')


async def reset_sqlite() -> None:
    print(f'🗑️ Recreating SQLite tables at {settings.DATABASE_URL_ASYNC}...')
    await drop_db_and_tables()
    await create_db_and_tables()
    await dispose_engines()
    print('   ✅ Tables recreated')


def reset_postgres() -> None:
    server_url, db_name = _parse_db_connection(settings.DATABASE_URL_SYNC)
    print(f'🗑️ Dropping database {db_name}...')
    _drop_and_create_db(server_url, db_name)

    print('🏗️ Running database migrations...')
    _run_alembic_migrations()


def main() -> None:
    print('🔄 Starting database reset...')
    print('=' * 50)

    try:
        if settings.IS_SQLITE:
            asyncio.run(reset_sqlite())
        else:
            reset_postgres()

        print('=' * 50)
        print('✅ Database reset completed!')
        print('💡 To seed data, run: python script/seed_data.py')

    except Exception as e:
        print(f'❌ Reset failed: {e}')
        exit(1)


if __name__ == '__main__':
    main()
