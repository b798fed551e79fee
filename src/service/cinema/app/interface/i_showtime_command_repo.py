"""
Showtime Command Repository Interface (Unit of Work bound)
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List

from src.service.cinema.domain.entity.showtime_entity import Showtime


class IShowtimeCommandRepo(ABC):
    @abstractmethod
    async def lock_halls(self, *, hall_ids: List[int]) -> set[int]:
        """
        Lock hall rows (SELECT ... FOR UPDATE) in ascending id order.

        Returns:
            Ids of the halls that exist
        """
        pass

    @abstractmethod
    async def movie_exists(self, *, movie_id: int) -> bool:
        pass

    @abstractmethod
    async def get_by_id(self, *, showtime_id: int, for_update: bool = False) -> Showtime | None:
        pass

    @abstractmethod
    async def find_in_window(
        self,
        *,
        hall_id: int,
        window_start: datetime,
        window_end: datetime,
        exclude_showtime_id: int | None = None,
    ) -> List[Showtime]:
        """Showtimes of the hall starting in [window_start, window_end] (inclusive)."""
        pass

    @abstractmethod
    async def count_bookings(self, *, showtime_id: int) -> int:
        pass

    @abstractmethod
    async def create(self, *, showtime: Showtime) -> Showtime:
        pass

    @abstractmethod
    async def update(self, *, showtime: Showtime) -> Showtime:
        pass

    @abstractmethod
    async def delete_with_bookings(self, *, showtime_id: int) -> int:
        """
        Delete the showtime's bookings (with their seat links), then the showtime.

        Returns:
            Number of bookings removed
        """
        pass
