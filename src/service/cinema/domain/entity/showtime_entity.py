from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger


PRICE_QUANTUM = Decimal('0.01')


def ensure_utc(value: datetime) -> datetime:
    """Naive datetimes are taken as UTC (SQLite returns them naive)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_price(value: Decimal | float | int | str) -> Decimal:
    try:
        price = Decimal(str(value)).quantize(PRICE_QUANTUM)
    except (InvalidOperation, ValueError):
        raise DomainError(f'Invalid price: {value}')
    if price < 0:
        raise DomainError('Price must be greater than or equal to 0')
    return price


@attrs.define
class Showtime:
    movie_id: int
    hall_id: int
    time: datetime = attrs.field(converter=ensure_utc)
    price: Decimal = attrs.field(converter=to_price)
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls, *, movie_id: int, hall_id: int, time: datetime, price: Decimal | float
    ) -> 'Showtime':
        now = datetime.now(timezone.utc)
        return cls(
            movie_id=movie_id,
            hall_id=hall_id,
            time=time,
            price=price,
            created_at=now,
            updated_at=now,
        )

    @Logger.io
    def apply_changes(
        self,
        *,
        movie_id: Optional[int] = None,
        hall_id: Optional[int] = None,
        time: Optional[datetime] = None,
        price: Optional[Decimal | float] = None,
    ) -> 'Showtime':
        """New values override old ones; omitted fields keep their current value."""
        return attrs.evolve(
            self,
            movie_id=self.movie_id if movie_id is None else movie_id,
            hall_id=self.hall_id if hall_id is None else hall_id,
            time=self.time if time is None else time,
            price=self.price if price is None else price,
            updated_at=datetime.now(timezone.utc),
        )

    def moves_hall(self, other: 'Showtime') -> bool:
        return self.hall_id != other.hall_id

    def reschedules(self, other: 'Showtime') -> bool:
        return self.hall_id != other.hall_id or self.time != other.time
