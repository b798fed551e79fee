from typing import List

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.cinema.domain.entity.booking_entity import Booking
from src.service.cinema.domain.entity.showtime_entity import Showtime
from src.service.cinema.domain.enum.booking_status import BookingStatus
from src.service.cinema.driven_adapter.model.booking_model import (
    BookingModel,
    booking_seat_table,
)
from src.service.cinema.driven_adapter.model.hall_model import SeatModel
from src.service.cinema.driven_adapter.model.showtime_model import ShowtimeModel
from src.service.cinema.driven_adapter.repo.showtime_command_repo_impl import (
    ShowtimeCommandRepoImpl,
)


class BookingCommandRepoImpl(IBookingCommandRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _to_entity(db_booking: BookingModel, seat_ids: List[int]) -> Booking:
        return Booking(
            id=db_booking.id,
            user_id=db_booking.user_id,
            showtime_id=db_booking.showtime_id,
            seat_ids=sorted(seat_ids),
            unit_price=db_booking.unit_price,
            total_price=db_booking.total_price,
            status=BookingStatus(db_booking.status),
            created_at=db_booking.created_at,
            updated_at=db_booking.updated_at,
        )

    @Logger.io
    async def lock_showtime(self, *, showtime_id: int) -> Showtime | None:
        result = await self.session.execute(
            select(ShowtimeModel)
            .where(ShowtimeModel.id == showtime_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        db_showtime = result.scalar_one_or_none()
        return ShowtimeCommandRepoImpl._to_entity(db_showtime) if db_showtime else None

    @Logger.io
    async def get_hall_seat_ids(self, *, hall_id: int) -> List[int]:
        result = await self.session.execute(
            select(SeatModel.id)
            .where(SeatModel.hall_id == hall_id)
            .order_by(SeatModel.row, SeatModel.number)
        )
        return list(result.scalars().all())

    @Logger.io
    async def get_occupied_seat_ids(
        self, *, showtime_id: int, exclude_booking_id: int | None = None
    ) -> set[int]:
        stmt = (
            select(booking_seat_table.c.seat_id)
            .join(BookingModel, BookingModel.id == booking_seat_table.c.booking_id)
            .where(
                BookingModel.showtime_id == showtime_id,
                BookingModel.status == BookingStatus.CONFIRMED.value,
            )
        )
        if exclude_booking_id is not None:
            stmt = stmt.where(BookingModel.id != exclude_booking_id)
        result = await self.session.execute(stmt)
        return set(result.scalars().all())

    async def _get_seat_ids(self, *, booking_id: int) -> List[int]:
        result = await self.session.execute(
            select(booking_seat_table.c.seat_id).where(
                booking_seat_table.c.booking_id == booking_id
            )
        )
        return list(result.scalars().all())

    @Logger.io
    async def get_by_id(self, *, booking_id: int, for_update: bool = False) -> Booking | None:
        stmt = (
            select(BookingModel)
            .where(BookingModel.id == booking_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        db_booking = result.scalar_one_or_none()
        if not db_booking:
            return None
        seat_ids = await self._get_seat_ids(booking_id=booking_id)
        return self._to_entity(db_booking, seat_ids)

    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        db_booking = BookingModel(
            user_id=booking.user_id,
            showtime_id=booking.showtime_id,
            status=booking.status.value,
            unit_price=booking.unit_price,
            total_price=booking.total_price,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )
        self.session.add(db_booking)
        await self.session.flush()

        await self.session.execute(
            insert(booking_seat_table),
            [{'booking_id': db_booking.id, 'seat_id': seat_id} for seat_id in booking.seat_ids],
        )
        Logger.base.info(
            f'🎟️  [BOOKING] Inserted booking {db_booking.id} '
            f'(showtime={booking.showtime_id}, seats={booking.seat_ids})'
        )
        return self._to_entity(db_booking, booking.seat_ids)

    @Logger.io
    async def update(self, *, booking: Booking) -> Booking:
        assert booking.id is not None, 'Booking to update must have an id'
        await self.session.execute(
            update(BookingModel)
            .where(BookingModel.id == booking.id)
            .values(
                status=booking.status.value,
                total_price=booking.total_price,
                updated_at=booking.updated_at,
            )
            .execution_options(synchronize_session=False)
        )

        current_seat_ids = set(await self._get_seat_ids(booking_id=booking.id))
        if current_seat_ids != set(booking.seat_ids):
            await self.session.execute(
                delete(booking_seat_table).where(booking_seat_table.c.booking_id == booking.id)
            )
            await self.session.execute(
                insert(booking_seat_table),
                [{'booking_id': booking.id, 'seat_id': seat_id} for seat_id in booking.seat_ids],
            )

        updated = await self.get_by_id(booking_id=booking.id)
        assert updated is not None
        return updated

    @Logger.io
    async def cancel_if_confirmed(self, *, booking_id: int, user_id: int) -> int:
        result = await self.session.execute(
            update(BookingModel)
            .where(
                BookingModel.id == booking_id,
                BookingModel.user_id == user_id,
                BookingModel.status == BookingStatus.CONFIRMED.value,
            )
            .values(status=BookingStatus.CANCELLED.value)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount  # type: ignore[attr-defined]
