"""
Checks that must run inside the locked transaction of a write use case.

Both read the authoritative state through the Unit of Work repositories,
after the caller has taken the relevant row lock (showtime row for seats,
hall row for schedules).
"""

from datetime import datetime

from src.platform.exception.exceptions import (
    DomainError,
    ScheduleConflictError,
    SeatsUnavailableError,
)
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.cinema.app.interface.i_showtime_command_repo import IShowtimeCommandRepo
from src.service.cinema.domain.entity.showtime_entity import Showtime
from src.service.cinema.domain.value_object.exclusivity_window import ExclusivityWindow
from src.service.cinema.domain.value_object.seat_selection import SeatSelection


@Logger.io
async def ensure_seats_bookable(
    *,
    booking_command_repo: IBookingCommandRepo,
    showtime: Showtime,
    seats: SeatSelection,
    exclude_booking_id: int | None = None,
) -> None:
    hall_seat_ids = await booking_command_repo.get_hall_seat_ids(hall_id=showtime.hall_id)
    if foreign := seats.outside_of(hall_seat_ids):
        raise DomainError(f'Seats {foreign} do not belong to the hall of showtime {showtime.id}')

    occupied = await booking_command_repo.get_occupied_seat_ids(
        showtime_id=showtime.id,  # type: ignore[arg-type]
        exclude_booking_id=exclude_booking_id,
    )
    if taken := seats.overlapping(occupied):
        raise SeatsUnavailableError(f'Seats {taken} are already booked for this showtime')


@Logger.io
async def ensure_hall_slot_free(
    *,
    showtime_command_repo: IShowtimeCommandRepo,
    window: ExclusivityWindow,
    hall_id: int,
    start_time: datetime,
    exclude_showtime_id: int | None = None,
) -> None:
    window_start, window_end = window.bounds(start_time)
    clashing = await showtime_command_repo.find_in_window(
        hall_id=hall_id,
        window_start=window_start,
        window_end=window_end,
        exclude_showtime_id=exclude_showtime_id,
    )
    if clashing:
        other = clashing[0]
        raise ScheduleConflictError(
            f'Hall {hall_id} already has showtime {other.id} at {other.time.isoformat()}, '
            f'within {window.minutes} minutes of {start_time.isoformat()}'
        )
