from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_hall_query_repo import IHallQueryRepo
from src.service.cinema.domain.entity.hall_entity import Hall, Seat
from src.service.cinema.domain.enum.booking_status import BookingStatus
from src.service.cinema.driven_adapter.model.booking_model import (
    BookingModel,
    booking_seat_table,
)
from src.service.cinema.driven_adapter.model.hall_model import HallModel, SeatModel
from src.service.cinema.driven_adapter.model.showtime_model import ShowtimeModel


class HallQueryRepoImpl(IHallQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            yield session

    @staticmethod
    def _to_entity(db_hall: HallModel) -> Hall:
        return Hall(
            id=db_hall.id,
            name=db_hall.name,
            seats=[
                Seat(id=seat.id, hall_id=seat.hall_id, row=seat.row, number=seat.number)
                for seat in db_hall.seats
            ],
        )

    @Logger.io
    async def get_hall(self, *, hall_id: int) -> Hall | None:
        async with self._get_session() as session:
            result = await session.execute(select(HallModel).where(HallModel.id == hall_id))
            db_hall = result.scalar_one_or_none()
            return self._to_entity(db_hall) if db_hall else None

    @Logger.io
    async def list_halls(self) -> List[Hall]:
        async with self._get_session() as session:
            result = await session.execute(select(HallModel).order_by(HallModel.name))
            return [self._to_entity(db_hall) for db_hall in result.scalars().all()]

    @Logger.io
    async def get_seat_positions(self, *, hall_id: int) -> List[tuple[int, int]]:
        async with self._get_session() as session:
            result = await session.execute(
                select(SeatModel.row, SeatModel.number)
                .where(SeatModel.hall_id == hall_id)
                .order_by(SeatModel.row, SeatModel.number)
            )
            return [(row, number) for row, number in result.all()]

    @Logger.io
    async def get_showtime_hall_id(self, *, showtime_id: int) -> int | None:
        async with self._get_session() as session:
            result = await session.execute(
                select(ShowtimeModel.hall_id).where(ShowtimeModel.id == showtime_id)
            )
            return result.scalar_one_or_none()

    @Logger.io
    async def get_taken_seat_ids(self, *, showtime_id: int) -> set[int]:
        async with self._get_session() as session:
            result = await session.execute(
                select(booking_seat_table.c.seat_id)
                .join(BookingModel, BookingModel.id == booking_seat_table.c.booking_id)
                .where(
                    BookingModel.showtime_id == showtime_id,
                    BookingModel.status == BookingStatus.CONFIRMED.value,
                )
            )
            return set(result.scalars().all())
