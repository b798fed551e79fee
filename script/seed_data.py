#!/usr/bin/env python3
"""
Database Seed Script
Populate demo data into the database

Features:
1. Create Halls - Hall A (10 rows x 15 seats) and Hall B (8 rows x 12 seats)
2. Create Catalog - genres and a handful of movies
3. Create Showtimes - today, tomorrow and next week, through the scheduling
   use case (exclusivity window enforced)
4. Print bearer tokens for an admin and a regular user

Notes:
- Users live in the external auth service; the tokens printed here are signed
  with this service's SECRET_KEY for local testing only
- Run `python script/reset_database.py` first for a clean database
"""

import asyncio
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal

from sqlalchemy import text

from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.db_setting import create_db_and_tables, dispose_engines, get_session_maker
from src.platform.config.core_setting import settings
from src.service.cinema.app.command.create_showtime_use_case import CreateShowtimeUseCase
from src.service.cinema.domain.entity.user_entity import UserEntity
from src.service.cinema.domain.enum.user_role import UserRole


HALLS = [
    ('Hall A - Dolby Atmos', 10, 15),
    ('Hall B - IMAX', 8, 12),
]

GENRES = ['Action', 'Animation', 'Drama', 'Sci-Fi', 'Thriller']

MOVIES = [
    ('Inception', 148, date(2010, 7, 16), ['Action', 'Sci-Fi', 'Thriller']),
    ('Interstellar', 169, date(2014, 11, 7), ['Drama', 'Sci-Fi']),
    ('Spirited Away', 125, date(2001, 7, 20), ['Animation']),
    ('Heat', 170, date(1995, 12, 15), ['Action', 'Drama', 'Thriller']),
    ('Arrival', 116, date(2016, 11, 11), ['Drama', 'Sci-Fi']),
]

# (movie index, hall index, day offset, start, price)
SHOWTIMES = [
    (0, 0, 0, time(14, 0), Decimal('12.50')),
    (1, 1, 0, time(17, 30), Decimal('15.00')),
    (2, 0, 1, time(16, 0), Decimal('13.50')),
    (3, 1, 1, time(19, 0), Decimal('16.00')),
    (4, 0, 7, time(20, 0), Decimal('14.00')),
]


async def create_catalog() -> tuple[list[int], list[int]]:
    """Create halls, genres and movies

    Returns:
        tuple: (hall ids, movie ids)
    """
    catalog_repo = container.catalog_command_repo()

    print(f'🏛️  Creating {len(HALLS)} halls...')
    hall_ids = []
    for name, rows, seats_per_row in HALLS:
        hall = await catalog_repo.create_hall(name=name, rows=rows, seats_per_row=seats_per_row)
        hall_ids.append(hall.id)
        print(f'   ✅ {hall.name}: ID={hall.id}, seats={hall.total_seats}')

    print(f'🏷️  Creating {len(GENRES)} genres...')
    genre_ids = {}
    for name in GENRES:
        genre = await catalog_repo.create_genre(name=name)
        genre_ids[name] = genre.id

    print(f'🎞️  Creating {len(MOVIES)} movies...')
    movie_ids = []
    for title, runtime, release_date, genres in MOVIES:
        movie = await catalog_repo.create_movie(
            title=title,
            runtime=runtime,
            release_date=release_date,
            genre_ids=[genre_ids[name] for name in genres],
        )
        movie_ids.append(movie.id)
        print(f'   ✅ {movie.title}: ID={movie.id}')

    return hall_ids, movie_ids


async def create_showtimes(hall_ids: list[int], movie_ids: list[int]) -> None:
    print(f'🕒 Creating {len(SHOWTIMES)} showtimes...')
    today = datetime.now(timezone.utc).date()

    for movie_index, hall_index, day_offset, start, price in SHOWTIMES:
        use_case = CreateShowtimeUseCase(
            uow=container.unit_of_work(),
            exclusivity_window=container.exclusivity_window(),
        )
        start_time = datetime.combine(today + timedelta(days=day_offset), start, tzinfo=timezone.utc)
        showtime = await use_case.create_showtime(
            movie_id=movie_ids[movie_index],
            hall_id=hall_ids[hall_index],
            start_time=start_time,
            price=price,
        )
        print(f'   ✅ Showtime ID={showtime.id} at {showtime.time.isoformat()} ({showtime.price})')


async def verify_data() -> None:
    """Verify seeded data"""
    print('🔍 Verifying seeded data...')

    async with get_session_maker()() as session:
        for table in ['hall', 'seat', 'genre', 'movie', 'showtime', 'booking']:
            result = await session.execute(text(f'SELECT COUNT(*) FROM {table}'))
            print(f'   {table.capitalize()} count: {result.scalar()}')

    print('   ✅ Data verification completed!')


def print_tokens() -> None:
    jwt_auth = container.jwt_auth()
    admin = UserEntity(id=1, role=UserRole.ADMIN, email='admin@cinema.com')
    user = UserEntity(id=2, role=UserRole.USER, email='user1@example.com')

    print('📋 Bearer tokens (local testing only):')
    print(f'   ADMIN ({admin.email}): {jwt_auth.create_jwt_token(admin)}')
    print(f'   USER  ({user.email}): {jwt_auth.create_jwt_token(user)}')


async def main() -> None:
    print('🌱 Starting data seeding...')
    print('=' * 50)

    container.wire(modules=WIRE_MODULES)
    try:
        if settings.IS_SQLITE:
            await create_db_and_tables()

        hall_ids, movie_ids = await create_catalog()
        print()

        await create_showtimes(hall_ids, movie_ids)
        print()

        await verify_data()

        print()
        print('=' * 50)
        print('🌱 Data seeding completed!')
        print_tokens()

    except Exception as e:
        print(f'❌ Seeding failed: {e}')
        raise
    finally:
        await dispose_engines()
        container.unwire()


if __name__ == '__main__':
    asyncio.run(main())
