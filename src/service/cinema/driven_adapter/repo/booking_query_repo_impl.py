from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.dto.booking_detail import BookedShowtime, BookingDetail
from src.service.cinema.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.cinema.domain.entity.booking_entity import Booking
from src.service.cinema.domain.entity.hall_entity import Seat
from src.service.cinema.domain.entity.showtime_entity import ensure_utc
from src.service.cinema.domain.enum.booking_status import BookingStatus
from src.service.cinema.driven_adapter.model.booking_model import BookingModel
from src.service.cinema.driven_adapter.model.showtime_model import ShowtimeModel


class BookingQueryRepoImpl(IBookingQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            yield session

    @staticmethod
    def _to_entity(db_booking: BookingModel) -> Booking:
        return Booking(
            id=db_booking.id,
            user_id=db_booking.user_id,
            showtime_id=db_booking.showtime_id,
            seat_ids=[seat.id for seat in db_booking.seats],
            unit_price=db_booking.unit_price,
            total_price=db_booking.total_price,
            status=BookingStatus(db_booking.status),
            created_at=db_booking.created_at,
            updated_at=db_booking.updated_at,
        )

    @staticmethod
    def _to_detail(db_booking: BookingModel) -> BookingDetail:
        db_showtime = db_booking.showtime
        return BookingDetail(
            booking=BookingQueryRepoImpl._to_entity(db_booking),
            showtime=BookedShowtime(
                id=db_showtime.id,
                time=ensure_utc(db_showtime.time),
                price=db_showtime.price,
                movie_id=db_showtime.movie_id,
                movie_title=db_showtime.movie.title,
                poster_url=db_showtime.movie.poster_url,
                hall_id=db_showtime.hall_id,
                hall_name=db_showtime.hall.name,
            ),
            seats=[
                Seat(id=seat.id, hall_id=seat.hall_id, row=seat.row, number=seat.number)
                for seat in db_booking.seats
            ],
        )

    @Logger.io
    async def list_by_user(self, *, user_id: int) -> List[BookingDetail]:
        async with self._get_session() as session:
            result = await session.execute(
                select(BookingModel)
                .options(
                    selectinload(BookingModel.showtime).selectinload(ShowtimeModel.movie),
                    selectinload(BookingModel.showtime).selectinload(ShowtimeModel.hall),
                )
                .where(BookingModel.user_id == user_id)
                .order_by(BookingModel.created_at.desc(), BookingModel.id.desc())
            )
            return [self._to_detail(db_booking) for db_booking in result.scalars().all()]
