from datetime import timedelta
from decimal import Decimal

import pytest

from src.platform.exception.exceptions import (
    DomainError,
    NotFoundError,
    ScheduleConflictError,
)
from src.service.cinema.app.command.create_showtime_use_case import CreateShowtimeUseCase
from src.service.cinema.app.command.delete_showtime_use_case import DeleteShowtimeUseCase
from src.service.cinema.app.command.update_showtime_use_case import UpdateShowtimeUseCase
from src.service.cinema.domain.value_object.exclusivity_window import ExclusivityWindow
from test.service.cinema.unit.helpers import (
    SHOWTIME_TIME,
    FakeUnitOfWork,
    echo_showtime,
    make_showtime,
)


pytestmark = pytest.mark.unit

WINDOW = ExclusivityWindow(minutes=30)


@pytest.fixture
def uow() -> FakeUnitOfWork:
    fake = FakeUnitOfWork()
    repo = fake.showtime_command_repo
    repo.lock_halls.side_effect = lambda *, hall_ids: set(hall_ids) & {1, 2}
    repo.movie_exists.return_value = True
    repo.find_in_window.return_value = []
    repo.count_bookings.return_value = 0
    repo.get_by_id.return_value = make_showtime(hall_id=1)
    repo.create.side_effect = echo_showtime
    repo.update.side_effect = echo_showtime
    return fake


class TestCreateShowtime:
    async def test_schedules_into_free_slot(self, uow):
        created = await CreateShowtimeUseCase(uow=uow, exclusivity_window=WINDOW).create_showtime(
            movie_id=1, hall_id=1, start_time=SHOWTIME_TIME, price=Decimal('12.5')
        )

        assert created.id == 10
        assert created.price == Decimal('12.50')
        assert uow.committed == 1
        uow.showtime_command_repo.find_in_window.assert_awaited_once_with(
            hall_id=1,
            window_start=SHOWTIME_TIME - timedelta(minutes=30),
            window_end=SHOWTIME_TIME + timedelta(minutes=30),
            exclude_showtime_id=None,
        )

    async def test_clash_inside_window(self, uow):
        uow.showtime_command_repo.find_in_window.return_value = [
            make_showtime(showtime_id=11, time=SHOWTIME_TIME + timedelta(minutes=20))
        ]

        with pytest.raises(ScheduleConflictError):
            await CreateShowtimeUseCase(uow=uow, exclusivity_window=WINDOW).create_showtime(
                movie_id=1, hall_id=1, start_time=SHOWTIME_TIME, price=10
            )

        assert uow.committed == 0

    async def test_unknown_hall(self, uow):
        with pytest.raises(NotFoundError, match='Hall'):
            await CreateShowtimeUseCase(uow=uow, exclusivity_window=WINDOW).create_showtime(
                movie_id=1, hall_id=9, start_time=SHOWTIME_TIME, price=10
            )

    async def test_unknown_movie(self, uow):
        uow.showtime_command_repo.movie_exists.return_value = False

        with pytest.raises(NotFoundError, match='Movie'):
            await CreateShowtimeUseCase(uow=uow, exclusivity_window=WINDOW).create_showtime(
                movie_id=9, hall_id=1, start_time=SHOWTIME_TIME, price=10
            )

    async def test_negative_price(self, uow):
        with pytest.raises(DomainError):
            await CreateShowtimeUseCase(uow=uow, exclusivity_window=WINDOW).create_showtime(
                movie_id=1, hall_id=1, start_time=SHOWTIME_TIME, price=-5
            )

        uow.showtime_command_repo.lock_halls.assert_not_awaited()


class TestUpdateShowtime:
    async def test_price_change_skips_window_scan(self, uow):
        updated = await UpdateShowtimeUseCase(uow=uow, exclusivity_window=WINDOW).update_showtime(
            showtime_id=10, price=Decimal('15')
        )

        assert updated.price == Decimal('15.00')
        uow.showtime_command_repo.find_in_window.assert_not_awaited()
        uow.showtime_command_repo.get_by_id.assert_awaited_with(showtime_id=10, for_update=True)

    async def test_reschedule_excludes_itself_from_scan(self, uow):
        new_time = SHOWTIME_TIME + timedelta(hours=1)

        await UpdateShowtimeUseCase(uow=uow, exclusivity_window=WINDOW).update_showtime(
            showtime_id=10, start_time=new_time
        )

        kwargs = uow.showtime_command_repo.find_in_window.await_args.kwargs
        assert kwargs['exclude_showtime_id'] == 10
        assert kwargs['window_start'] == new_time - timedelta(minutes=30)

    async def test_hall_move_locks_both_halls_in_order(self, uow):
        await UpdateShowtimeUseCase(uow=uow, exclusivity_window=WINDOW).update_showtime(
            showtime_id=10, hall_id=2
        )

        uow.showtime_command_repo.lock_halls.assert_awaited_once_with(hall_ids=[1, 2])

    async def test_hall_move_with_bookings_is_rejected(self, uow):
        uow.showtime_command_repo.count_bookings.return_value = 3

        with pytest.raises(DomainError):
            await UpdateShowtimeUseCase(uow=uow, exclusivity_window=WINDOW).update_showtime(
                showtime_id=10, hall_id=2
            )

        uow.showtime_command_repo.update.assert_not_awaited()

    async def test_missing_showtime(self, uow):
        uow.showtime_command_repo.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await UpdateShowtimeUseCase(uow=uow, exclusivity_window=WINDOW).update_showtime(
                showtime_id=404, price=Decimal('1')
            )

    async def test_reschedule_into_occupied_slot(self, uow):
        uow.showtime_command_repo.find_in_window.return_value = [make_showtime(showtime_id=11)]

        with pytest.raises(ScheduleConflictError):
            await UpdateShowtimeUseCase(uow=uow, exclusivity_window=WINDOW).update_showtime(
                showtime_id=10, start_time=SHOWTIME_TIME + timedelta(minutes=10)
            )


class TestDeleteShowtime:
    async def test_delete_reports_removed_bookings(self, uow):
        uow.showtime_command_repo.delete_with_bookings.return_value = 4

        removed = await DeleteShowtimeUseCase(uow=uow).delete_showtime(showtime_id=10)

        assert removed == 4
        assert uow.committed == 1

    async def test_delete_missing_showtime(self, uow):
        uow.showtime_command_repo.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await DeleteShowtimeUseCase(uow=uow).delete_showtime(showtime_id=404)

        uow.showtime_command_repo.delete_with_bookings.assert_not_awaited()
