from abc import ABC, abstractmethod
from typing import List

from src.service.cinema.app.dto.showtime_listing import MovieShowtimes, ShowtimeFilterOptions
from src.service.cinema.domain.value_object.showtime_filter import ShowtimeFilter


class IShowtimeQueryRepo(ABC):
    @abstractmethod
    async def list_grouped_by_movie(self, *, filters: ShowtimeFilter) -> List[MovieShowtimes]:
        """
        Movies (by title) with their matching showtimes (by start time).

        Movies without a matching showtime are left out. Availability counts
        are a snapshot and never feed a booking decision.
        """
        pass

    @abstractmethod
    async def get_filter_options(self) -> ShowtimeFilterOptions:
        pass
