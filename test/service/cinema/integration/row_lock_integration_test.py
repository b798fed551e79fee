"""
Lock ordering of the write paths: bookings queue behind the showtime row,
scheduling queues behind the hall row. On PostgreSQL these are row locks, so
unrelated halls keep going; SQLite serializes every writer.
"""

import asyncio
from datetime import timedelta

import pytest

from src.platform.config.core_setting import settings
from src.platform.config.di import container
from src.service.cinema.domain.entity.booking_entity import Booking
from src.service.cinema.domain.entity.showtime_entity import Showtime
from test.constants import (
    ANOTHER_USER_ID,
    DEFAULT_SHOWTIME_PRICE,
    DEFAULT_SHOWTIME_START,
    TEST_USER_ID,
)
from test.service.cinema.fixtures import (
    new_create_booking_use_case,
    new_create_showtime_use_case,
)
from test.shared.utils import seat_id


pytestmark = pytest.mark.integration

LOCK_HELD_FOR = 0.3

postgres_only = pytest.mark.skipif(
    settings.IS_SQLITE, reason='SQLite has no row locks; writers are serialized'
)


class TestShowtimeRowLock:
    async def test_booking_waits_for_showtime_lock(self, hall_a, showtime):
        uow = container.unit_of_work()
        async with uow:
            assert await uow.booking_command_repo.lock_showtime(showtime_id=showtime.id)
            pending = asyncio.create_task(
                new_create_booking_use_case().create_booking(
                    user_id=TEST_USER_ID,
                    showtime_id=showtime.id,
                    seat_ids=[seat_id(hall_a, 1, 1)],
                )
            )
            await asyncio.sleep(LOCK_HELD_FOR)
            assert not pending.done()

        booking = await pending
        assert booking.seat_ids == [seat_id(hall_a, 1, 1)]


class TestHallRowLock:
    async def test_scheduling_waits_for_hall_lock(self, hall_a, movie):
        uow = container.unit_of_work()
        async with uow:
            assert await uow.showtime_command_repo.lock_halls(hall_ids=[hall_a.id]) == {hall_a.id}
            pending = asyncio.create_task(
                new_create_showtime_use_case().create_showtime(
                    movie_id=movie.id,
                    hall_id=hall_a.id,
                    start_time=DEFAULT_SHOWTIME_START,
                    price=DEFAULT_SHOWTIME_PRICE,
                )
            )
            await asyncio.sleep(LOCK_HELD_FOR)
            assert not pending.done()

        created = await pending
        assert created.hall_id == hall_a.id

    @postgres_only
    async def test_other_hall_and_bookings_proceed_while_hall_is_locked(
        self, hall_a, hall_b, movie, showtime
    ):
        uow = container.unit_of_work()
        async with uow:
            await uow.showtime_command_repo.lock_halls(hall_ids=[hall_a.id])

            other_hall, booking = await asyncio.wait_for(
                asyncio.gather(
                    new_create_showtime_use_case().create_showtime(
                        movie_id=movie.id,
                        hall_id=hall_b.id,
                        start_time=DEFAULT_SHOWTIME_START + timedelta(hours=2),
                        price=DEFAULT_SHOWTIME_PRICE,
                    ),
                    new_create_booking_use_case().create_booking(
                        user_id=ANOTHER_USER_ID,
                        showtime_id=showtime.id,
                        seat_ids=[seat_id(hall_a, 2, 2)],
                    ),
                ),
                timeout=LOCK_HELD_FOR * 10,
            )

        assert isinstance(other_hall, Showtime) and other_hall.hall_id == hall_b.id
        assert isinstance(booking, Booking)
