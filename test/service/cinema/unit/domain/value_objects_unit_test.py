from datetime import datetime, time, timedelta, timezone

import pytest

from src.platform.exception.exceptions import DomainError
from src.service.cinema.domain.value_object.exclusivity_window import ExclusivityWindow
from src.service.cinema.domain.value_object.hall_dimensions import HallDimensions
from src.service.cinema.domain.value_object.seat_selection import SeatSelection
from src.service.cinema.domain.value_object.showtime_filter import ShowtimeFilter


pytestmark = pytest.mark.unit

EIGHTEEN = datetime(2030, 6, 1, 18, 0, tzinfo=timezone.utc)


class TestSeatSelection:
    def test_ids_are_sorted(self):
        assert SeatSelection.of([5, 2, 9]).as_list() == [2, 5, 9]

    @pytest.mark.parametrize('seat_ids', [[], [1, 1], [0], [-3, 4]])
    def test_invalid_selections(self, seat_ids):
        with pytest.raises(DomainError):
            SeatSelection.of(seat_ids)

    def test_outside_of_and_overlapping(self):
        seats = SeatSelection.of([1, 2, 3])

        assert seats.outside_of([1, 2]) == [3]
        assert seats.overlapping({2, 3, 7}) == [2, 3]
        assert seats.overlapping(set()) == []


class TestExclusivityWindow:
    @pytest.mark.parametrize(
        'offset_minutes,conflicts',
        [(0, True), (20, True), (-20, True), (30, True), (-30, True), (31, False), (60, False)],
    )
    def test_thirty_minute_window(self, offset_minutes, conflicts):
        window = ExclusivityWindow(minutes=30)

        other = EIGHTEEN + timedelta(minutes=offset_minutes)

        assert window.conflicts(EIGHTEEN, other) is conflicts

    def test_bounds(self):
        start, end = ExclusivityWindow(minutes=30).bounds(EIGHTEEN)

        assert start == datetime(2030, 6, 1, 17, 30, tzinfo=timezone.utc)
        assert end == datetime(2030, 6, 1, 18, 30, tzinfo=timezone.utc)


class TestHallDimensions:
    def test_rectangular_hall(self):
        positions = [(row, number) for row in range(1, 4) for number in range(1, 6)]

        assert HallDimensions.from_positions(positions) == HallDimensions(rows=3, seats_per_row=5)

    def test_seats_per_row_comes_from_row_one(self):
        positions = [(1, 1), (1, 2), (2, 1), (2, 2), (2, 3), (2, 4)]

        assert HallDimensions.from_positions(positions) == HallDimensions(rows=2, seats_per_row=2)

    def test_lowest_row_is_used_without_row_one(self):
        positions = [(2, 1), (2, 2), (2, 3), (4, 1)]

        assert HallDimensions.from_positions(positions) == HallDimensions(rows=4, seats_per_row=3)

    def test_no_seats(self):
        assert HallDimensions.from_positions([]) is None


class TestShowtimeFilter:
    def test_parse(self):
        filters = ShowtimeFilter.parse(
            date='2030-06-01', time_start='17:00', time_end='20:00', genre_id=3
        )

        assert filters.time_start == time(17, 0)
        assert filters.time_end == time(20, 0)
        assert filters.genre_id == 3
        assert filters.day_bounds() == (
            datetime(2030, 6, 1, tzinfo=timezone.utc),
            datetime(2030, 6, 2, tzinfo=timezone.utc),
        )

    def test_empty_values_mean_no_filter(self):
        filters = ShowtimeFilter.parse(date='', time_start=None)

        assert filters.day_bounds() is None
        assert filters.matches_time_of_day(EIGHTEEN)

    @pytest.mark.parametrize(
        'kwargs', [{'date': '01/06/2030'}, {'time_start': '25:00'}, {'time_end': '6pm'}]
    )
    def test_malformed_values(self, kwargs):
        with pytest.raises(DomainError):
            ShowtimeFilter.parse(**kwargs)

    def test_time_start_inclusive_time_end_exclusive(self):
        filters = ShowtimeFilter.parse(time_start='18:00', time_end='19:00')

        assert filters.matches_time_of_day(EIGHTEEN)
        assert filters.matches_time_of_day(EIGHTEEN + timedelta(minutes=59))
        assert not filters.matches_time_of_day(EIGHTEEN + timedelta(hours=1))
        assert not filters.matches_time_of_day(EIGHTEEN - timedelta(minutes=1))
