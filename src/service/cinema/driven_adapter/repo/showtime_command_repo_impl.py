from datetime import datetime
from typing import List

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_showtime_command_repo import IShowtimeCommandRepo
from src.service.cinema.domain.entity.showtime_entity import Showtime, ensure_utc
from src.service.cinema.driven_adapter.model.booking_model import (
    BookingModel,
    booking_seat_table,
)
from src.service.cinema.driven_adapter.model.hall_model import HallModel
from src.service.cinema.driven_adapter.model.movie_model import MovieModel
from src.service.cinema.driven_adapter.model.showtime_model import ShowtimeModel


class ShowtimeCommandRepoImpl(IShowtimeCommandRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _to_entity(db_showtime: ShowtimeModel) -> Showtime:
        return Showtime(
            id=db_showtime.id,
            movie_id=db_showtime.movie_id,
            hall_id=db_showtime.hall_id,
            time=db_showtime.time,
            price=db_showtime.price,
            created_at=db_showtime.created_at,
            updated_at=db_showtime.updated_at,
        )

    @Logger.io
    async def lock_halls(self, *, hall_ids: List[int]) -> set[int]:
        # Ascending id order so two re-schedules across the same halls cannot deadlock
        locked: set[int] = set()
        for hall_id in sorted(set(hall_ids)):
            result = await self.session.execute(
                select(HallModel.id).where(HallModel.id == hall_id).with_for_update()
            )
            if result.scalar_one_or_none() is not None:
                locked.add(hall_id)
        return locked

    @Logger.io
    async def movie_exists(self, *, movie_id: int) -> bool:
        result = await self.session.execute(select(MovieModel.id).where(MovieModel.id == movie_id))
        return result.scalar_one_or_none() is not None

    @Logger.io
    async def get_by_id(self, *, showtime_id: int, for_update: bool = False) -> Showtime | None:
        stmt = (
            select(ShowtimeModel)
            .where(ShowtimeModel.id == showtime_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        db_showtime = result.scalar_one_or_none()
        return self._to_entity(db_showtime) if db_showtime else None

    @Logger.io
    async def find_in_window(
        self,
        *,
        hall_id: int,
        window_start: datetime,
        window_end: datetime,
        exclude_showtime_id: int | None = None,
    ) -> List[Showtime]:
        stmt = (
            select(ShowtimeModel)
            .where(
                ShowtimeModel.hall_id == hall_id,
                ShowtimeModel.time >= ensure_utc(window_start),
                ShowtimeModel.time <= ensure_utc(window_end),
            )
            .order_by(ShowtimeModel.time)
        )
        if exclude_showtime_id is not None:
            stmt = stmt.where(ShowtimeModel.id != exclude_showtime_id)
        result = await self.session.execute(stmt)
        return [self._to_entity(db_showtime) for db_showtime in result.scalars().all()]

    @Logger.io
    async def count_bookings(self, *, showtime_id: int) -> int:
        # Every status: cancelled and completed bookings still reference hall seats
        result = await self.session.execute(
            select(func.count(BookingModel.id)).where(BookingModel.showtime_id == showtime_id)
        )
        return result.scalar_one()

    @Logger.io
    async def create(self, *, showtime: Showtime) -> Showtime:
        db_showtime = ShowtimeModel(
            movie_id=showtime.movie_id,
            hall_id=showtime.hall_id,
            time=showtime.time,
            price=showtime.price,
            created_at=showtime.created_at,
            updated_at=showtime.updated_at,
        )
        self.session.add(db_showtime)
        await self.session.flush()
        return self._to_entity(db_showtime)

    @Logger.io
    async def update(self, *, showtime: Showtime) -> Showtime:
        assert showtime.id is not None, 'Showtime to update must have an id'
        await self.session.execute(
            update(ShowtimeModel)
            .where(ShowtimeModel.id == showtime.id)
            .values(
                movie_id=showtime.movie_id,
                hall_id=showtime.hall_id,
                time=showtime.time,
                price=showtime.price,
                updated_at=showtime.updated_at,
            )
            .execution_options(synchronize_session=False)
        )
        updated = await self.get_by_id(showtime_id=showtime.id)
        assert updated is not None
        return updated

    @Logger.io
    async def delete_with_bookings(self, *, showtime_id: int) -> int:
        booking_ids = select(BookingModel.id).where(BookingModel.showtime_id == showtime_id)
        await self.session.execute(
            delete(booking_seat_table).where(booking_seat_table.c.booking_id.in_(booking_ids))
        )
        result = await self.session.execute(
            delete(BookingModel)
            .where(BookingModel.showtime_id == showtime_id)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(
            delete(ShowtimeModel)
            .where(ShowtimeModel.id == showtime_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount  # type: ignore[attr-defined]
