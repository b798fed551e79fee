from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from src.platform.constant.db_limit import MAX_INT_ID
from src.service.cinema.app.dto.showtime_listing import (
    MovieShowtimes,
    ShowtimeAvailability,
    ShowtimeFilterOptions,
)
from src.service.cinema.domain.entity.movie_entity import Genre, Movie
from src.service.cinema.domain.entity.showtime_entity import Showtime


class ShowtimeCreateRequest(BaseModel):
    movie_id: int = Field(gt=0, le=MAX_INT_ID)
    hall_id: int = Field(gt=0, le=MAX_INT_ID)
    time: datetime  # naive values are taken as UTC
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)

    class Config:
        json_schema_extra = {
            'example': {
                'movie_id': 1,
                'hall_id': 1,
                'time': '2025-06-01T18:00:00Z',
                'price': 12.5,
            }
        }


class ShowtimeUpdateRequest(BaseModel):
    movie_id: Optional[int] = Field(default=None, gt=0, le=MAX_INT_ID)
    hall_id: Optional[int] = Field(default=None, gt=0, le=MAX_INT_ID)
    time: Optional[datetime] = None
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)

    class Config:
        json_schema_extra = {'example': {'time': '2025-06-01T19:00:00Z', 'price': 14}}


class ShowtimeResponse(BaseModel):
    id: int
    movie_id: int
    hall_id: int
    time: datetime
    price: float
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, showtime: Showtime) -> 'ShowtimeResponse':
        return cls(
            id=showtime.id or 0,
            movie_id=showtime.movie_id,
            hall_id=showtime.hall_id,
            time=showtime.time,
            price=float(showtime.price),
            created_at=showtime.created_at,
            updated_at=showtime.updated_at,
        )


class GenreResponse(BaseModel):
    id: int
    name: str

    @classmethod
    def from_entity(cls, genre: Genre) -> 'GenreResponse':
        return cls(id=genre.id, name=genre.name)


class ShowtimeAvailabilityResponse(BaseModel):
    id: int
    time: datetime
    price: float
    hall_id: int
    hall_name: str
    total_seats: int
    available_seats: int

    @classmethod
    def from_dto(cls, showtime: ShowtimeAvailability) -> 'ShowtimeAvailabilityResponse':
        return cls(
            id=showtime.id,
            time=showtime.time,
            price=float(showtime.price),
            hall_id=showtime.hall_id,
            hall_name=showtime.hall_name,
            total_seats=showtime.total_seats,
            available_seats=showtime.available_seats,
        )


class MovieShowtimesResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': 1,
                'title': 'Inception',
                'runtime': 148,
                'release_date': '2010-07-16',
                'poster_url': None,
                'genres': [{'id': 1, 'name': 'Sci-Fi'}],
                'showtimes': [
                    {
                        'id': 3,
                        'time': '2025-06-01T18:00:00Z',
                        'price': 12.5,
                        'hall_id': 1,
                        'hall_name': 'Hall A',
                        'total_seats': 150,
                        'available_seats': 148,
                    }
                ],
            }
        },
    }

    id: int
    title: str
    runtime: Optional[int] = None
    release_date: Optional[date] = None
    poster_url: Optional[str] = None
    genres: List[GenreResponse]
    showtimes: List[ShowtimeAvailabilityResponse]

    @classmethod
    def from_dto(cls, group: MovieShowtimes) -> 'MovieShowtimesResponse':
        movie: Movie = group.movie
        return cls(
            id=movie.id,
            title=movie.title,
            runtime=movie.runtime,
            release_date=movie.release_date,
            poster_url=movie.poster_url,
            genres=[GenreResponse.from_entity(genre) for genre in movie.genres],
            showtimes=[ShowtimeAvailabilityResponse.from_dto(s) for s in group.showtimes],
        )


class ShowtimeFilterOptionsResponse(BaseModel):
    genres: List[GenreResponse]
    dates: List[str]
    times: List[str]

    @classmethod
    def from_dto(cls, options: ShowtimeFilterOptions) -> 'ShowtimeFilterOptionsResponse':
        return cls(
            genres=[GenreResponse.from_entity(genre) for genre in options.genres],
            dates=options.dates,
            times=options.times,
        )
