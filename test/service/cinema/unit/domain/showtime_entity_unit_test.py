from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from src.platform.exception.exceptions import DomainError
from src.service.cinema.domain.entity.hall_entity import Hall, Seat
from src.service.cinema.domain.entity.showtime_entity import Showtime, ensure_utc, to_price
from test.service.cinema.unit.helpers import SHOWTIME_TIME, make_showtime


pytestmark = pytest.mark.unit


class TestShowtime:
    def test_create_normalizes_time_and_price(self):
        naive = datetime(2030, 6, 1, 18, 0)

        showtime = Showtime.create(movie_id=1, hall_id=1, time=naive, price=12.5)

        assert showtime.time == SHOWTIME_TIME
        assert showtime.price == Decimal('12.50')

    def test_offset_times_are_converted_to_utc(self):
        taipei = timezone(timedelta(hours=8))

        assert ensure_utc(datetime(2030, 6, 2, 2, 0, tzinfo=taipei)) == SHOWTIME_TIME

    @pytest.mark.parametrize('value', ['-0.01', 'abc'])
    def test_invalid_prices(self, value):
        with pytest.raises(DomainError):
            to_price(value)

    def test_apply_changes_keeps_omitted_fields(self):
        showtime = make_showtime(price='12.50')

        updated = showtime.apply_changes(price=Decimal('15'))

        assert updated.price == Decimal('15.00')
        assert updated.time == showtime.time
        assert updated.hall_id == showtime.hall_id
        assert not updated.reschedules(showtime)

    def test_reschedule_and_hall_move(self):
        showtime = make_showtime(hall_id=1)

        later = showtime.apply_changes(time=SHOWTIME_TIME + timedelta(hours=2))
        moved = showtime.apply_changes(hall_id=2)

        assert later.reschedules(showtime) and not later.moves_hall(showtime)
        assert moved.reschedules(showtime) and moved.moves_hall(showtime)


class TestHall:
    def test_seats_are_kept_in_seat_map_order(self):
        hall = Hall(
            id=1,
            name='Hall A',
            seats=[
                Seat(id=3, hall_id=1, row=2, number=1),
                Seat(id=2, hall_id=1, row=1, number=2),
                Seat(id=1, hall_id=1, row=1, number=1),
            ],
        )

        assert hall.seat_ids == [1, 2, 3]
        assert hall.total_seats == 3
        assert hall.dimensions is not None and hall.dimensions.rows == 2

    def test_with_occupancy_marks_taken_seats(self):
        hall = Hall(
            id=1,
            name='Hall A',
            seats=[Seat(id=1, hall_id=1, row=1, number=1), Seat(id=2, hall_id=1, row=1, number=2)],
        )

        annotated = hall.with_occupancy({2})

        assert [seat.is_taken for seat in annotated.seats] == [False, True]
        assert not any(seat.is_taken for seat in hall.seats)
