from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.dto.showtime_listing import MovieShowtimes, ShowtimeFilterOptions
from src.service.cinema.app.interface.i_showtime_query_repo import IShowtimeQueryRepo
from src.service.cinema.domain.value_object.showtime_filter import ShowtimeFilter


class ListShowtimesUseCase:
    """Browse showtimes grouped by movie, with the options the filters accept."""

    def __init__(self, showtime_query_repo: IShowtimeQueryRepo):
        self.showtime_query_repo = showtime_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        showtime_query_repo: IShowtimeQueryRepo = Depends(Provide[Container.showtime_query_repo]),
    ) -> Self:
        return cls(showtime_query_repo=showtime_query_repo)

    @Logger.io
    async def list_grouped_by_movie(
        self,
        *,
        date: Optional[str] = None,
        time_start: Optional[str] = None,
        time_end: Optional[str] = None,
        genre_id: Optional[int] = None,
        movie_id: Optional[int] = None,
    ) -> List[MovieShowtimes]:
        filters = ShowtimeFilter.parse(
            date=date,
            time_start=time_start,
            time_end=time_end,
            genre_id=genre_id,
            movie_id=movie_id,
        )
        return await self.showtime_query_repo.list_grouped_by_movie(filters=filters)

    @Logger.io
    async def get_filter_options(self) -> ShowtimeFilterOptions:
        return await self.showtime_query_repo.get_filter_options()
