"""
Booking Command Repository Interface

Runs inside a Unit of Work: every method shares the UoW transaction, and
row locks taken here are held until the UoW commits or rolls back.
"""

from abc import ABC, abstractmethod
from typing import List

from src.service.cinema.domain.entity.booking_entity import Booking
from src.service.cinema.domain.entity.showtime_entity import Showtime


class IBookingCommandRepo(ABC):
    @abstractmethod
    async def lock_showtime(self, *, showtime_id: int) -> Showtime | None:
        """
        Lock the showtime row (SELECT ... FOR UPDATE) and return it.

        Every booking write of a showtime takes this lock before reading
        occupancy, so concurrent writers of the same showtime are serialized.
        """
        pass

    @abstractmethod
    async def get_hall_seat_ids(self, *, hall_id: int) -> List[int]:
        pass

    @abstractmethod
    async def get_occupied_seat_ids(
        self, *, showtime_id: int, exclude_booking_id: int | None = None
    ) -> set[int]:
        """
        Seat ids held by CONFIRMED bookings of the showtime.

        Args:
            showtime_id: Showtime whose occupancy is read
            exclude_booking_id: Booking whose own seats are not counted (seat swap)
        """
        pass

    @abstractmethod
    async def get_by_id(self, *, booking_id: int, for_update: bool = False) -> Booking | None:
        pass

    @abstractmethod
    async def create(self, *, booking: Booking) -> Booking:
        """Insert the booking and its seat links; returns the booking with its id."""
        pass

    @abstractmethod
    async def update(self, *, booking: Booking) -> Booking:
        """Persist status, price and seat set of an existing booking."""
        pass

    @abstractmethod
    async def cancel_if_confirmed(self, *, booking_id: int, user_id: int) -> int:
        """
        Conditional update: CONFIRMED -> CANCELLED for the owner only.

        Returns:
            Affected row count (0 when missing, not owned or not CONFIRMED)
        """
        pass
