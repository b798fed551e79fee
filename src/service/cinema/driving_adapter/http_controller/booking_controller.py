from typing import Annotated, List

from fastapi import APIRouter, Depends, Path, status
from opentelemetry import trace

from src.platform.constant.db_limit import MAX_INT_ID
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.cinema.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.cinema.app.command.update_booking_use_case import UpdateBookingUseCase
from src.service.cinema.app.query.list_user_bookings_use_case import ListUserBookingsUseCase
from src.service.cinema.domain.entity.user_entity import UserEntity
from src.service.cinema.driving_adapter.http_controller.auth.role_auth import get_current_user
from src.service.cinema.driving_adapter.http_controller.schema.booking_schema import (
    BookingCreateRequest,
    BookingResponse,
    BookingUpdateRequest,
    BookingWithDetailsResponse,
    CancelBookingResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_booking(
    request: BookingCreateRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: CreateBookingUseCase = Depends(CreateBookingUseCase.depends),
) -> BookingResponse:
    with tracer.start_as_current_span('controller.create_booking') as span:
        span.set_attribute('showtime.id', request.showtime_id)
        span.set_attribute('user.id', current_user.id)

        booking = await use_case.create_booking(
            user_id=current_user.id,
            showtime_id=request.showtime_id,
            seat_ids=request.seat_ids,
        )
        if booking.id is None:
            raise ValueError('Booking ID should not be None after creation.')

        span.set_attribute('booking.id', booking.id)
        return BookingResponse.from_entity(booking)


@router.get('/my_booking', response_model=List[BookingWithDetailsResponse])
@Logger.io
async def list_my_bookings(
    current_user: UserEntity = Depends(get_current_user),
    use_case: ListUserBookingsUseCase = Depends(ListUserBookingsUseCase.depends),
) -> List[BookingWithDetailsResponse]:
    details = await use_case.list_user_bookings(user_id=current_user.id)
    return [BookingWithDetailsResponse.from_detail(detail) for detail in details]


@router.patch('/{booking_id}')
@Logger.io
async def update_booking(
    booking_id: Annotated[int, Path(le=MAX_INT_ID)],
    request: BookingUpdateRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: UpdateBookingUseCase = Depends(UpdateBookingUseCase.depends),
) -> BookingResponse:
    booking = await use_case.update_booking(
        booking_id=booking_id,
        user_id=current_user.id,
        seat_ids=request.seat_ids,
        status=request.status,
    )
    return BookingResponse.from_entity(booking)


@router.delete('/{booking_id}')
@Logger.io
async def cancel_booking(
    booking_id: Annotated[int, Path(le=MAX_INT_ID)],
    current_user: UserEntity = Depends(get_current_user),
    use_case: CancelBookingUseCase = Depends(CancelBookingUseCase.depends),
) -> CancelBookingResponse:
    cancelled = await use_case.cancel_booking(booking_id=booking_id, user_id=current_user.id)
    return CancelBookingResponse(cancelled=cancelled > 0)
