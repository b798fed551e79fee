"""
Hall read use cases: seat maps (optionally annotated for a showtime) and sizes
"""

from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_hall_query_repo import IHallQueryRepo
from src.service.cinema.domain.entity.hall_entity import Hall
from src.service.cinema.domain.value_object.hall_dimensions import HallDimensions


class HallQueryUseCase:
    def __init__(self, hall_query_repo: IHallQueryRepo):
        self.hall_query_repo = hall_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        hall_query_repo: IHallQueryRepo = Depends(Provide[Container.hall_query_repo]),
    ) -> Self:
        return cls(hall_query_repo=hall_query_repo)

    @Logger.io
    async def get_hall_with_seats(
        self, *, hall_id: int, showtime_id: Optional[int] = None
    ) -> Hall:
        """
        Seat map of a hall. With a showtime, each seat carries `is_taken`
        (held by a CONFIRMED booking of that showtime).

        Raises:
            NotFoundError: Unknown hall or showtime
            DomainError: The showtime runs in another hall
        """
        hall = await self.hall_query_repo.get_hall(hall_id=hall_id)
        if hall is None:
            raise NotFoundError('Hall not found')
        if showtime_id is None:
            return hall

        showtime_hall_id = await self.hall_query_repo.get_showtime_hall_id(showtime_id=showtime_id)
        if showtime_hall_id is None:
            raise NotFoundError('Showtime not found')
        if showtime_hall_id != hall_id:
            raise DomainError(f'Showtime {showtime_id} does not take place in hall {hall_id}')

        taken = await self.hall_query_repo.get_taken_seat_ids(showtime_id=showtime_id)
        return hall.with_occupancy(taken)

    @Logger.io
    async def get_hall_size(self, *, hall_id: int) -> HallDimensions:
        positions = await self.hall_query_repo.get_seat_positions(hall_id=hall_id)
        dimensions = HallDimensions.from_positions(positions)
        if dimensions is None:
            raise NotFoundError('Hall not found or has no seats')
        return dimensions

    @Logger.io
    async def list_halls(self, *, showtime_id: Optional[int] = None) -> List[Hall]:
        halls = await self.hall_query_repo.list_halls()
        if showtime_id is None:
            return halls

        if await self.hall_query_repo.get_showtime_hall_id(showtime_id=showtime_id) is None:
            raise NotFoundError('Showtime not found')
        taken = await self.hall_query_repo.get_taken_seat_ids(showtime_id=showtime_id)
        return [hall.with_occupancy(taken) for hall in halls]

    @Logger.io
    async def list_halls_basic(self) -> List[Hall]:
        return await self.hall_query_repo.list_halls()
