from src.service.cinema.driven_adapter.model.booking_model import (
    BookingModel,
    booking_seat_table,
)
from src.service.cinema.driven_adapter.model.hall_model import HallModel, SeatModel
from src.service.cinema.driven_adapter.model.movie_model import (
    GenreModel,
    MovieModel,
    movie_genre_table,
)
from src.service.cinema.driven_adapter.model.showtime_model import ShowtimeModel

__all__ = [
    'BookingModel',
    'GenreModel',
    'HallModel',
    'MovieModel',
    'SeatModel',
    'ShowtimeModel',
    'booking_seat_table',
    'movie_genre_table',
]
