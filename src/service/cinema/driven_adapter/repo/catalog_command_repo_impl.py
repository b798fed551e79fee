from contextlib import asynccontextmanager
from datetime import date
from typing import AsyncContextManager, AsyncIterator, Callable, List, Optional

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_catalog_command_repo import ICatalogCommandRepo
from src.service.cinema.domain.entity.hall_entity import Hall, Seat
from src.service.cinema.domain.entity.movie_entity import Genre, Movie
from src.service.cinema.driven_adapter.model.hall_model import HallModel, SeatModel
from src.service.cinema.driven_adapter.model.movie_model import GenreModel, MovieModel


class CatalogCommandRepoImpl(ICatalogCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            yield session

    @Logger.io
    async def create_hall(self, *, name: str, rows: int, seats_per_row: int) -> Hall:
        if rows <= 0 or seats_per_row <= 0:
            raise DomainError('Hall must have at least one row and one seat per row')

        async with self._get_session() as session:
            db_hall = HallModel(name=name)
            session.add(db_hall)
            await session.flush()
            hall_id = db_hall.id

            await session.execute(
                insert(SeatModel),
                [
                    {'hall_id': hall_id, 'row': row, 'number': number}
                    for row in range(1, rows + 1)
                    for number in range(1, seats_per_row + 1)
                ],
            )
            result = await session.execute(
                select(SeatModel)
                .where(SeatModel.hall_id == hall_id)
                .order_by(SeatModel.row, SeatModel.number)
            )
            seats = [
                Seat(id=seat.id, hall_id=hall_id, row=seat.row, number=seat.number)
                for seat in result.scalars().all()
            ]
            await session.commit()

        Logger.base.info(f'🏛️  [CATALOG] Hall "{name}" created with {rows}x{seats_per_row} seats')
        return Hall(id=hall_id, name=name, seats=seats)

    @Logger.io
    async def create_genre(self, *, name: str) -> Genre:
        async with self._get_session() as session:
            db_genre = GenreModel(name=name)
            session.add(db_genre)
            await session.commit()
            return Genre(id=db_genre.id, name=db_genre.name)

    @Logger.io
    async def create_movie(
        self,
        *,
        title: str,
        runtime: Optional[int] = None,
        release_date: Optional[date] = None,
        poster_url: Optional[str] = None,
        genre_ids: Optional[List[int]] = None,
    ) -> Movie:
        async with self._get_session() as session:
            genres: List[GenreModel] = []
            if genre_ids:
                result = await session.execute(
                    select(GenreModel).where(GenreModel.id.in_(genre_ids))
                )
                genres = list(result.scalars().all())
                if len(genres) != len(set(genre_ids)):
                    raise DomainError('Unknown genre id')

            db_movie = MovieModel(
                title=title,
                runtime=runtime,
                release_date=release_date,
                poster_url=poster_url,
                genres=genres,
            )
            session.add(db_movie)
            await session.commit()

            return Movie(
                id=db_movie.id,
                title=db_movie.title,
                runtime=db_movie.runtime,
                release_date=db_movie.release_date,
                poster_url=db_movie.poster_url,
                genres=sorted(
                    (Genre(id=genre.id, name=genre.name) for genre in genres),
                    key=lambda genre: genre.name,
                ),
            )
