from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

import attrs

from src.platform.exception.exceptions import (
    ForbiddenError,
    InvalidTransitionError,
)
from src.platform.logging.loguru_io import Logger
from src.service.cinema.domain.entity.showtime_entity import PRICE_QUANTUM, to_price
from src.service.cinema.domain.enum.booking_status import BookingStatus
from src.service.cinema.domain.value_object.seat_selection import SeatSelection


@attrs.define
class Booking:
    user_id: int
    showtime_id: int
    seat_ids: List[int]
    unit_price: Decimal = attrs.field(converter=to_price)  # showtime price at booking time
    total_price: Decimal = attrs.field(converter=to_price)
    status: BookingStatus = BookingStatus.CONFIRMED
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        user_id: int,
        showtime_id: int,
        seats: SeatSelection,
        unit_price: Decimal,
    ) -> 'Booking':
        now = datetime.now(timezone.utc)
        return cls(
            user_id=user_id,
            showtime_id=showtime_id,
            seat_ids=seats.as_list(),
            unit_price=unit_price,
            total_price=cls.price_for(unit_price=unit_price, seat_count=len(seats)),
            status=BookingStatus.CONFIRMED,
            created_at=now,
            updated_at=now,
        )

    @staticmethod
    def price_for(*, unit_price: Decimal, seat_count: int) -> Decimal:
        return (Decimal(unit_price) * seat_count).quantize(PRICE_QUANTUM)

    @property
    def is_confirmed(self) -> bool:
        return self.status == BookingStatus.CONFIRMED

    def ensure_owned_by(self, user_id: int) -> None:
        if self.user_id != user_id:
            raise ForbiddenError('Only the owner can modify this booking')

    @Logger.io
    def transition_to(self, status: BookingStatus) -> 'Booking':
        if status == self.status:
            return self
        if not self.status.can_transition_to(status):
            raise InvalidTransitionError(
                f'Cannot change booking status from {self.status} to {status}'
            )
        return attrs.evolve(self, status=status, updated_at=datetime.now(timezone.utc))

    @Logger.io
    def replace_seats(self, seats: SeatSelection) -> 'Booking':
        """Swap the seat set; the per-seat price stays the one frozen at creation."""
        if not self.is_confirmed:
            raise InvalidTransitionError(f'Cannot change seats of a {self.status} booking')
        return attrs.evolve(
            self,
            seat_ids=seats.as_list(),
            total_price=self.price_for(unit_price=self.unit_price, seat_count=len(seats)),
            updated_at=datetime.now(timezone.utc),
        )
