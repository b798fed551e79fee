"""Read models of the showtime listing and its filter options."""

from datetime import datetime
from decimal import Decimal
from typing import List

import attrs

from src.service.cinema.domain.entity.movie_entity import Genre, Movie


@attrs.define(frozen=True)
class ShowtimeAvailability:
    id: int
    time: datetime
    price: Decimal
    hall_id: int
    hall_name: str
    total_seats: int
    booked_seats: int

    @property
    def available_seats(self) -> int:
        return max(self.total_seats - self.booked_seats, 0)


@attrs.define(frozen=True)
class MovieShowtimes:
    movie: Movie
    showtimes: List[ShowtimeAvailability]


@attrs.define(frozen=True)
class ShowtimeFilterOptions:
    genres: List[Genre]
    dates: List[str]  # YYYY-MM-DD
    times: List[str]  # HH:MM
