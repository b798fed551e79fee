"""
Cinema catalog and use-case fixtures for integration tests.

Halls, genres and movies go through the catalog repository; showtimes go
through the scheduling use case, so fixtures obey the exclusivity window.
"""

from datetime import datetime
from decimal import Decimal
from typing import Awaitable, Callable

import pytest

from src.platform.config.di import container
from src.service.cinema.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.cinema.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.cinema.app.command.create_showtime_use_case import CreateShowtimeUseCase
from src.service.cinema.app.command.delete_showtime_use_case import DeleteShowtimeUseCase
from src.service.cinema.app.command.update_booking_use_case import UpdateBookingUseCase
from src.service.cinema.app.command.update_showtime_use_case import UpdateShowtimeUseCase
from src.service.cinema.app.query.hall_query_use_case import HallQueryUseCase
from src.service.cinema.app.query.list_showtimes_use_case import ListShowtimesUseCase
from src.service.cinema.app.query.list_user_bookings_use_case import ListUserBookingsUseCase
from src.service.cinema.domain.entity.hall_entity import Hall
from src.service.cinema.domain.entity.movie_entity import Genre, Movie
from src.service.cinema.domain.entity.showtime_entity import Showtime
from test.constants import (
    DEFAULT_SHOWTIME_PRICE,
    DEFAULT_SHOWTIME_START,
    HALL_A_NAME,
    HALL_A_ROWS,
    HALL_A_SEATS_PER_ROW,
    HALL_B_NAME,
    HALL_B_ROWS,
    HALL_B_SEATS_PER_ROW,
)


MakeShowtime = Callable[..., Awaitable[Showtime]]


# =============================================================================
# Use case factories (one Unit of Work per call, like one HTTP request)
# =============================================================================
def new_create_showtime_use_case() -> CreateShowtimeUseCase:
    return CreateShowtimeUseCase(
        uow=container.unit_of_work(), exclusivity_window=container.exclusivity_window()
    )


def new_update_showtime_use_case() -> UpdateShowtimeUseCase:
    return UpdateShowtimeUseCase(
        uow=container.unit_of_work(), exclusivity_window=container.exclusivity_window()
    )


def new_delete_showtime_use_case() -> DeleteShowtimeUseCase:
    return DeleteShowtimeUseCase(uow=container.unit_of_work())


def new_create_booking_use_case() -> CreateBookingUseCase:
    return CreateBookingUseCase(uow=container.unit_of_work())


def new_update_booking_use_case() -> UpdateBookingUseCase:
    return UpdateBookingUseCase(uow=container.unit_of_work())


def new_cancel_booking_use_case() -> CancelBookingUseCase:
    return CancelBookingUseCase(uow=container.unit_of_work())


def new_hall_query_use_case() -> HallQueryUseCase:
    return HallQueryUseCase(hall_query_repo=container.hall_query_repo())


def new_list_showtimes_use_case() -> ListShowtimesUseCase:
    return ListShowtimesUseCase(showtime_query_repo=container.showtime_query_repo())


def new_list_user_bookings_use_case() -> ListUserBookingsUseCase:
    return ListUserBookingsUseCase(booking_query_repo=container.booking_query_repo())


# =============================================================================
# Catalog fixtures
# =============================================================================
@pytest.fixture
async def hall_a(clean_database: None) -> Hall:
    """2 rows x 5 seats: (1,1) ... (2,5)"""
    return await container.catalog_command_repo().create_hall(
        name=HALL_A_NAME, rows=HALL_A_ROWS, seats_per_row=HALL_A_SEATS_PER_ROW
    )


@pytest.fixture
async def hall_b(clean_database: None) -> Hall:
    return await container.catalog_command_repo().create_hall(
        name=HALL_B_NAME, rows=HALL_B_ROWS, seats_per_row=HALL_B_SEATS_PER_ROW
    )


@pytest.fixture
async def genres(clean_database: None) -> dict[str, Genre]:
    repo = container.catalog_command_repo()
    return {name: await repo.create_genre(name=name) for name in ('Animation', 'Sci-Fi')}


@pytest.fixture
async def movie(genres: dict[str, Genre]) -> Movie:
    return await container.catalog_command_repo().create_movie(
        title='Inception', runtime=148, genre_ids=[genres['Sci-Fi'].id]
    )


@pytest.fixture
async def another_movie(genres: dict[str, Genre]) -> Movie:
    return await container.catalog_command_repo().create_movie(
        title='Spirited Away', runtime=125, genre_ids=[genres['Animation'].id]
    )


# =============================================================================
# Showtime fixtures
# =============================================================================
@pytest.fixture
def make_showtime() -> MakeShowtime:
    async def _make(
        *,
        movie_id: int,
        hall_id: int,
        start_time: datetime = DEFAULT_SHOWTIME_START,
        price: Decimal = DEFAULT_SHOWTIME_PRICE,
    ) -> Showtime:
        return await new_create_showtime_use_case().create_showtime(
            movie_id=movie_id, hall_id=hall_id, start_time=start_time, price=price
        )

    return _make


@pytest.fixture
async def showtime(hall_a: Hall, movie: Movie, make_showtime: MakeShowtime) -> Showtime:
    """Hall A, 2030-06-01 18:00 UTC, 12.50 per seat"""
    return await make_showtime(movie_id=movie.id, hall_id=hall_a.id)
