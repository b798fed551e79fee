import time
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.transaction_retry import run_with_transaction_retry
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import SeatsUnavailableError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.cinema_metrics import metrics


class CancelBookingUseCase:
    """
    Idempotent cancel.

    One conditional UPDATE (CONFIRMED -> CANCELLED, owner only). Missing,
    foreign or already-cancelled bookings simply affect 0 rows.
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def cancel_booking(self, *, booking_id: int, user_id: int) -> int:
        start = time.perf_counter()
        with self.tracer.start_as_current_span(
            'use_case.cancel_booking',
            attributes={'booking.id': booking_id, 'user.id': user_id},
        ):
            cancelled = await run_with_transaction_retry(
                lambda: self._cancel_atomically(booking_id=booking_id, user_id=user_id),
                on_exhausted=lambda: SeatsUnavailableError('Booking is busy, please retry'),
                operation_name='cancel_booking',
            )
            metrics.record_booking(
                operation='cancel',
                result='cancelled' if cancelled else 'noop',
                duration=time.perf_counter() - start,
            )
            return cancelled

    async def _cancel_atomically(self, *, booking_id: int, user_id: int) -> int:
        async with self.uow:
            cancelled = await self.uow.booking_command_repo.cancel_if_confirmed(
                booking_id=booking_id, user_id=user_id
            )
            await self.uow.commit()
            return cancelled
