from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, List

from sqlalchemy import distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.dto.showtime_listing import (
    MovieShowtimes,
    ShowtimeAvailability,
    ShowtimeFilterOptions,
)
from src.service.cinema.app.interface.i_showtime_query_repo import IShowtimeQueryRepo
from src.service.cinema.domain.entity.movie_entity import Genre, Movie
from src.service.cinema.domain.entity.showtime_entity import ensure_utc
from src.service.cinema.domain.enum.booking_status import BookingStatus
from src.service.cinema.domain.value_object.showtime_filter import ShowtimeFilter
from src.service.cinema.driven_adapter.model.booking_model import (
    BookingModel,
    booking_seat_table,
)
from src.service.cinema.driven_adapter.model.hall_model import SeatModel
from src.service.cinema.driven_adapter.model.movie_model import (
    GenreModel,
    MovieModel,
    movie_genre_table,
)
from src.service.cinema.driven_adapter.model.showtime_model import ShowtimeModel


class ShowtimeQueryRepoImpl(IShowtimeQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            yield session

    @staticmethod
    def _to_movie(db_movie: MovieModel) -> Movie:
        return Movie(
            id=db_movie.id,
            title=db_movie.title,
            runtime=db_movie.runtime,
            release_date=db_movie.release_date,
            poster_url=db_movie.poster_url,
            genres=[Genre(id=genre.id, name=genre.name) for genre in db_movie.genres],
        )

    @staticmethod
    async def _booked_seat_counts(session: AsyncSession, showtime_ids: List[int]) -> dict[int, int]:
        if not showtime_ids:
            return {}
        result = await session.execute(
            select(BookingModel.showtime_id, func.count(distinct(booking_seat_table.c.seat_id)))
            .join(booking_seat_table, booking_seat_table.c.booking_id == BookingModel.id)
            .where(
                BookingModel.showtime_id.in_(showtime_ids),
                BookingModel.status == BookingStatus.CONFIRMED.value,
            )
            .group_by(BookingModel.showtime_id)
        )
        return {showtime_id: count for showtime_id, count in result.all()}

    @staticmethod
    async def _hall_seat_counts(session: AsyncSession, hall_ids: List[int]) -> dict[int, int]:
        if not hall_ids:
            return {}
        result = await session.execute(
            select(SeatModel.hall_id, func.count(SeatModel.id))
            .where(SeatModel.hall_id.in_(hall_ids))
            .group_by(SeatModel.hall_id)
        )
        return {hall_id: count for hall_id, count in result.all()}

    @Logger.io
    async def list_grouped_by_movie(self, *, filters: ShowtimeFilter) -> List[MovieShowtimes]:
        stmt = (
            select(ShowtimeModel)
            .join(MovieModel, MovieModel.id == ShowtimeModel.movie_id)
            .options(selectinload(ShowtimeModel.movie), selectinload(ShowtimeModel.hall))
            .order_by(MovieModel.title, MovieModel.id, ShowtimeModel.time)
        )
        if (day_bounds := filters.day_bounds()) is not None:
            day_start, day_end = day_bounds
            stmt = stmt.where(ShowtimeModel.time >= day_start, ShowtimeModel.time < day_end)
        if filters.movie_id is not None:
            stmt = stmt.where(ShowtimeModel.movie_id == filters.movie_id)
        if filters.genre_id is not None:
            stmt = stmt.where(
                ShowtimeModel.movie_id.in_(
                    select(movie_genre_table.c.movie_id).where(
                        movie_genre_table.c.genre_id == filters.genre_id
                    )
                )
            )

        async with self._get_session() as session:
            result = await session.execute(stmt)
            db_showtimes = [
                db_showtime
                for db_showtime in result.scalars().all()
                if filters.matches_time_of_day(ensure_utc(db_showtime.time))
            ]
            booked = await self._booked_seat_counts(session, [s.id for s in db_showtimes])
            totals = await self._hall_seat_counts(
                session, sorted({s.hall_id for s in db_showtimes})
            )

            grouped: dict[int, MovieShowtimes] = {}
            for db_showtime in db_showtimes:
                group = grouped.get(db_showtime.movie_id)
                if group is None:
                    group = MovieShowtimes(movie=self._to_movie(db_showtime.movie), showtimes=[])
                    grouped[db_showtime.movie_id] = group
                group.showtimes.append(
                    ShowtimeAvailability(
                        id=db_showtime.id,
                        time=ensure_utc(db_showtime.time),
                        price=db_showtime.price,
                        hall_id=db_showtime.hall_id,
                        hall_name=db_showtime.hall.name,
                        total_seats=totals.get(db_showtime.hall_id, 0),
                        booked_seats=booked.get(db_showtime.id, 0),
                    )
                )
            # dicts keep insertion order, which is the title order of the query
            return list(grouped.values())

    @Logger.io
    async def get_filter_options(self) -> ShowtimeFilterOptions:
        async with self._get_session() as session:
            genre_result = await session.execute(
                select(GenreModel)
                .join(movie_genre_table, movie_genre_table.c.genre_id == GenreModel.id)
                .join(ShowtimeModel, ShowtimeModel.movie_id == movie_genre_table.c.movie_id)
                .distinct()
                .order_by(GenreModel.name)
            )
            genres = [Genre(id=genre.id, name=genre.name) for genre in genre_result.scalars()]

            time_result = await session.execute(
                select(ShowtimeModel.time).order_by(ShowtimeModel.time)
            )
            starts = [ensure_utc(start) for start in time_result.scalars().all()]

        return ShowtimeFilterOptions(
            genres=genres,
            dates=sorted({start.strftime('%Y-%m-%d') for start in starts}),
            times=sorted({start.strftime('%H:%M') for start in starts}),
        )
