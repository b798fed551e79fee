from abc import ABC, abstractmethod
from typing import List

from src.service.cinema.app.dto.booking_detail import BookingDetail


class IBookingQueryRepo(ABC):
    @abstractmethod
    async def list_by_user(self, *, user_id: int) -> List[BookingDetail]:
        """User's bookings, newest first, with showtime, movie, hall and seats."""
        pass
