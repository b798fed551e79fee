from datetime import timedelta

import pytest

from src.platform.exception.exceptions import DomainError, NotFoundError
from src.service.cinema.domain.value_object.hall_dimensions import HallDimensions
from test.constants import DEFAULT_SHOWTIME_START, TEST_USER_ID
from test.service.cinema.fixtures import (
    new_create_booking_use_case,
    new_hall_query_use_case,
    new_list_showtimes_use_case,
)
from test.shared.utils import seat_id


pytestmark = pytest.mark.integration


@pytest.fixture
async def programme(hall_a, hall_b, movie, another_movie, make_showtime):
    """
    Inception:     06-01 18:00 Hall A, 06-02 21:00 Hall B
    Spirited Away: 06-01 14:00 Hall B
    """
    return {
        'inception_evening': await make_showtime(movie_id=movie.id, hall_id=hall_a.id),
        'inception_next_day': await make_showtime(
            movie_id=movie.id,
            hall_id=hall_b.id,
            start_time=DEFAULT_SHOWTIME_START + timedelta(days=1, hours=3),
        ),
        'spirited_matinee': await make_showtime(
            movie_id=another_movie.id,
            hall_id=hall_b.id,
            start_time=DEFAULT_SHOWTIME_START - timedelta(hours=4),
        ),
    }


class TestListShowtimes:
    async def test_grouped_by_movie_title_then_time(self, programme, movie, another_movie):
        groups = await new_list_showtimes_use_case().list_grouped_by_movie()

        assert [group.movie.title for group in groups] == ['Inception', 'Spirited Away']
        assert [s.id for s in groups[0].showtimes] == [
            programme['inception_evening'].id,
            programme['inception_next_day'].id,
        ]
        assert [genre.name for genre in groups[0].movie.genres] == ['Sci-Fi']

    async def test_date_filter(self, programme):
        groups = await new_list_showtimes_use_case().list_grouped_by_movie(date='2030-06-02')

        assert len(groups) == 1
        assert [s.id for s in groups[0].showtimes] == [programme['inception_next_day'].id]

    async def test_time_of_day_filter(self, programme):
        groups = await new_list_showtimes_use_case().list_grouped_by_movie(
            time_start='12:00', time_end='18:00'
        )

        assert [group.movie.title for group in groups] == ['Spirited Away']

    async def test_genre_and_movie_filters(self, programme, genres, movie):
        by_genre = await new_list_showtimes_use_case().list_grouped_by_movie(
            genre_id=genres['Animation'].id
        )
        by_movie = await new_list_showtimes_use_case().list_grouped_by_movie(movie_id=movie.id)

        assert [group.movie.title for group in by_genre] == ['Spirited Away']
        assert [group.movie.id for group in by_movie] == [movie.id]

    async def test_availability_counts_confirmed_seats(self, programme, hall_a):
        evening = programme['inception_evening']
        await new_create_booking_use_case().create_booking(
            user_id=TEST_USER_ID,
            showtime_id=evening.id,
            seat_ids=[seat_id(hall_a, 1, 1), seat_id(hall_a, 1, 2)],
        )

        groups = await new_list_showtimes_use_case().list_grouped_by_movie(date='2030-06-01')

        listed = next(s for g in groups for s in g.showtimes if s.id == evening.id)
        assert listed.total_seats == 10
        assert listed.booked_seats == 2
        assert listed.available_seats == 8
        assert listed.hall_name == hall_a.name

    async def test_malformed_date(self, programme):
        with pytest.raises(DomainError):
            await new_list_showtimes_use_case().list_grouped_by_movie(date='June 1st')

    async def test_filter_options(self, programme):
        options = await new_list_showtimes_use_case().get_filter_options()

        assert [genre.name for genre in options.genres] == ['Animation', 'Sci-Fi']
        assert options.dates == ['2030-06-01', '2030-06-02']
        assert options.times == ['14:00', '18:00', '21:00']


class TestHallQueries:
    async def test_hall_size(self, hall_a, hall_b):
        size = await new_hall_query_use_case().get_hall_size(hall_id=hall_b.id)

        assert size == HallDimensions(rows=3, seats_per_row=4)

    async def test_unknown_hall_size(self, clean_database):
        with pytest.raises(NotFoundError):
            await new_hall_query_use_case().get_hall_size(hall_id=999)

    async def test_seat_map_for_showtime_of_other_hall(self, programme, hall_a):
        with pytest.raises(DomainError):
            await new_hall_query_use_case().get_hall_with_seats(
                hall_id=hall_a.id, showtime_id=programme['spirited_matinee'].id
            )

    async def test_halls_listed_by_name(self, hall_a, hall_b):
        halls = await new_hall_query_use_case().list_halls_basic()

        assert [hall.name for hall in halls] == ['Hall A', 'Hall B']
        assert [hall.total_seats for hall in halls] == [10, 12]
