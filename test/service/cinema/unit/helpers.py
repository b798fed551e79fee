from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.service.cinema.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.cinema.app.interface.i_showtime_command_repo import IShowtimeCommandRepo
from src.service.cinema.domain.entity.booking_entity import Booking
from src.service.cinema.domain.entity.showtime_entity import Showtime
from src.service.cinema.domain.enum.booking_status import BookingStatus


SHOWTIME_TIME = datetime(2030, 6, 1, 18, 0, tzinfo=timezone.utc)


class FakeUnitOfWork(AbstractUnitOfWork):
    """In-memory UoW around AsyncMock repositories; counts commits and rollbacks."""

    def __init__(self) -> None:
        self.booking_command_repo = AsyncMock(spec=IBookingCommandRepo)
        self.showtime_command_repo = AsyncMock(spec=IShowtimeCommandRepo)
        self.committed = 0
        self.rolled_back = 0

    async def _commit(self) -> None:
        self.committed += 1

    async def rollback(self) -> None:
        self.rolled_back += 1


def make_showtime(
    *,
    showtime_id: int = 10,
    movie_id: int = 1,
    hall_id: int = 1,
    time: datetime = SHOWTIME_TIME,
    price: str = '12.50',
) -> Showtime:
    return Showtime(
        id=showtime_id, movie_id=movie_id, hall_id=hall_id, time=time, price=Decimal(price)
    )


def make_booking(
    *,
    booking_id: int = 100,
    user_id: int = 2,
    showtime_id: int = 10,
    seat_ids: list[int] | None = None,
    unit_price: str = '12.50',
    status: BookingStatus = BookingStatus.CONFIRMED,
) -> Booking:
    seat_ids = seat_ids or [1, 2]
    return Booking(
        id=booking_id,
        user_id=user_id,
        showtime_id=showtime_id,
        seat_ids=seat_ids,
        unit_price=Decimal(unit_price),
        total_price=Decimal(unit_price) * len(seat_ids),
        status=status,
    )


async def echo_booking(*, booking: Booking) -> Booking:
    """Side effect for repo.create / repo.update: hand the entity back with an id."""
    if booking.id is None:
        booking.id = 100
    return booking


async def echo_showtime(*, showtime: Showtime) -> Showtime:
    if showtime.id is None:
        showtime.id = 10
    return showtime
