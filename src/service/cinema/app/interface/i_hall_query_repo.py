from abc import ABC, abstractmethod
from typing import List

from src.service.cinema.domain.entity.hall_entity import Hall


class IHallQueryRepo(ABC):
    @abstractmethod
    async def get_hall(self, *, hall_id: int) -> Hall | None:
        """Hall with its seats in (row, number) order."""
        pass

    @abstractmethod
    async def list_halls(self) -> List[Hall]:
        """All halls ordered by name, seats included."""
        pass

    @abstractmethod
    async def get_seat_positions(self, *, hall_id: int) -> List[tuple[int, int]]:
        pass

    @abstractmethod
    async def get_showtime_hall_id(self, *, showtime_id: int) -> int | None:
        pass

    @abstractmethod
    async def get_taken_seat_ids(self, *, showtime_id: int) -> set[int]:
        """Seat ids held by CONFIRMED bookings of the showtime."""
        pass
