from unittest.mock import AsyncMock

import pytest

from src.platform.exception.exceptions import DomainError, NotFoundError
from src.service.cinema.app.interface.i_hall_query_repo import IHallQueryRepo
from src.service.cinema.app.query.hall_query_use_case import HallQueryUseCase
from src.service.cinema.domain.entity.hall_entity import Hall, Seat
from src.service.cinema.domain.value_object.hall_dimensions import HallDimensions


pytestmark = pytest.mark.unit


def _hall(hall_id: int = 1) -> Hall:
    return Hall(
        id=hall_id,
        name=f'Hall {hall_id}',
        seats=[
            Seat(id=hall_id * 10 + n, hall_id=hall_id, row=1, number=n) for n in range(1, 4)
        ],
    )


@pytest.fixture
def repo() -> AsyncMock:
    mock = AsyncMock(spec=IHallQueryRepo)
    mock.get_hall.return_value = _hall()
    mock.list_halls.return_value = [_hall(1), _hall(2)]
    mock.get_showtime_hall_id.return_value = 1
    mock.get_taken_seat_ids.return_value = {12}
    return mock


class TestGetHallWithSeats:
    async def test_plain_seat_map(self, repo):
        hall = await HallQueryUseCase(hall_query_repo=repo).get_hall_with_seats(hall_id=1)

        assert [seat.id for seat in hall.seats] == [11, 12, 13]
        assert not any(seat.is_taken for seat in hall.seats)
        repo.get_taken_seat_ids.assert_not_awaited()

    async def test_seats_marked_for_showtime(self, repo):
        hall = await HallQueryUseCase(hall_query_repo=repo).get_hall_with_seats(
            hall_id=1, showtime_id=10
        )

        assert [seat.is_taken for seat in hall.seats] == [False, True, False]

    async def test_unknown_hall(self, repo):
        repo.get_hall.return_value = None

        with pytest.raises(NotFoundError):
            await HallQueryUseCase(hall_query_repo=repo).get_hall_with_seats(hall_id=9)

    async def test_unknown_showtime(self, repo):
        repo.get_showtime_hall_id.return_value = None

        with pytest.raises(NotFoundError):
            await HallQueryUseCase(hall_query_repo=repo).get_hall_with_seats(
                hall_id=1, showtime_id=404
            )

    async def test_showtime_of_another_hall(self, repo):
        repo.get_showtime_hall_id.return_value = 2

        with pytest.raises(DomainError):
            await HallQueryUseCase(hall_query_repo=repo).get_hall_with_seats(
                hall_id=1, showtime_id=10
            )


class TestGetHallSize:
    async def test_size_from_seat_positions(self, repo):
        repo.get_seat_positions.return_value = [(1, 1), (1, 2), (2, 1), (2, 2), (3, 1)]

        size = await HallQueryUseCase(hall_query_repo=repo).get_hall_size(hall_id=1)

        assert size == HallDimensions(rows=3, seats_per_row=2)

    async def test_hall_without_seats(self, repo):
        repo.get_seat_positions.return_value = []

        with pytest.raises(NotFoundError):
            await HallQueryUseCase(hall_query_repo=repo).get_hall_size(hall_id=1)


class TestListHalls:
    async def test_list_with_occupancy(self, repo):
        halls = await HallQueryUseCase(hall_query_repo=repo).list_halls(showtime_id=10)

        assert [hall.id for hall in halls] == [1, 2]
        assert [seat.is_taken for seat in halls[0].seats] == [False, True, False]
        assert not any(seat.is_taken for seat in halls[1].seats)

    async def test_basic_listing(self, repo):
        halls = await HallQueryUseCase(hall_query_repo=repo).list_halls_basic()

        assert len(halls) == 2
        repo.get_taken_seat_ids.assert_not_awaited()
