from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import BaseModel, Field

from src.platform.constant.db_limit import MAX_INT_ID
from src.service.cinema.app.dto.booking_detail import BookingDetail
from src.service.cinema.domain.entity.booking_entity import Booking
from src.service.cinema.domain.enum.booking_status import BookingStatus
from src.service.cinema.driving_adapter.http_controller.schema.hall_schema import SeatResponse


SeatId = Annotated[int, Field(le=MAX_INT_ID)]


class BookingCreateRequest(BaseModel):
    showtime_id: int = Field(gt=0, le=MAX_INT_ID)
    seat_ids: List[SeatId] = Field(min_length=1)

    class Config:
        json_schema_extra = {'example': {'showtime_id': 1, 'seat_ids': [1, 2]}}


class BookingUpdateRequest(BaseModel):
    seat_ids: Optional[List[SeatId]] = Field(default=None, min_length=1)
    status: Optional[BookingStatus] = None

    class Config:
        json_schema_extra = {
            'examples': [
                {'seat_ids': [3, 4]},
                {'status': 'CANCELLED'},
            ]
        }


class BookingResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': 1,
                'user_id': 2,
                'showtime_id': 1,
                'seat_ids': [1, 2],
                'total_price': 25.0,
                'status': 'CONFIRMED',
                'created_at': '2025-06-01T10:30:00Z',
                'updated_at': '2025-06-01T10:30:00Z',
            }
        },
    }

    id: int
    user_id: int
    showtime_id: int
    seat_ids: List[int]
    total_price: float
    status: BookingStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, booking: Booking) -> 'BookingResponse':
        return cls(
            id=booking.id or 0,
            user_id=booking.user_id,
            showtime_id=booking.showtime_id,
            seat_ids=booking.seat_ids,
            total_price=float(booking.total_price),
            status=booking.status,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )


class BookedShowtimeResponse(BaseModel):
    id: int
    time: datetime
    price: float
    movie_id: int
    movie_title: str
    poster_url: Optional[str] = None
    hall_id: int
    hall_name: str


class BookingWithDetailsResponse(BookingResponse):
    showtime: BookedShowtimeResponse
    seats: List[SeatResponse]

    @classmethod
    def from_detail(cls, detail: BookingDetail) -> 'BookingWithDetailsResponse':
        booking, showtime = detail.booking, detail.showtime
        return cls(
            **BookingResponse.from_entity(booking).model_dump(),
            showtime=BookedShowtimeResponse(
                id=showtime.id,
                time=showtime.time,
                price=float(showtime.price),
                movie_id=showtime.movie_id,
                movie_title=showtime.movie_title,
                poster_url=showtime.poster_url,
                hall_id=showtime.hall_id,
                hall_name=showtime.hall_name,
            ),
            seats=[SeatResponse.from_entity(seat) for seat in detail.seats],
        )


class CancelBookingResponse(BaseModel):
    cancelled: bool
