"""Read model returned by the 'my bookings' query."""

from datetime import datetime
from decimal import Decimal
from typing import List

import attrs

from src.service.cinema.domain.entity.booking_entity import Booking
from src.service.cinema.domain.entity.hall_entity import Seat


@attrs.define(frozen=True)
class BookedShowtime:
    id: int
    time: datetime
    price: Decimal
    movie_id: int
    movie_title: str
    hall_id: int
    hall_name: str
    poster_url: str | None = None


@attrs.define(frozen=True)
class BookingDetail:
    booking: Booking
    showtime: BookedShowtime
    seats: List[Seat]
