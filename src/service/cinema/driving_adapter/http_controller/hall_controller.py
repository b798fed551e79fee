from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Path, Query

from src.platform.constant.db_limit import MAX_INT_ID
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.query.hall_query_use_case import HallQueryUseCase
from src.service.cinema.driving_adapter.http_controller.schema.hall_schema import (
    HallBasicResponse,
    HallSizeResponse,
    HallWithSeatsResponse,
)


router = APIRouter()


@router.get('', response_model=List[HallWithSeatsResponse])
@Logger.io
async def list_halls(
    showtime_id: Optional[int] = Query(default=None, le=MAX_INT_ID),
    use_case: HallQueryUseCase = Depends(HallQueryUseCase.depends),
) -> List[HallWithSeatsResponse]:
    halls = await use_case.list_halls(showtime_id=showtime_id)
    return [HallWithSeatsResponse.from_entity(hall) for hall in halls]


@router.get('/basic', response_model=List[HallBasicResponse])
@Logger.io
async def list_halls_basic(
    use_case: HallQueryUseCase = Depends(HallQueryUseCase.depends),
) -> List[HallBasicResponse]:
    halls = await use_case.list_halls_basic()
    return [HallBasicResponse.from_entity(hall) for hall in halls]


@router.get('/{hall_id}/seats')
@Logger.io
async def get_hall_with_seats(
    hall_id: Annotated[int, Path(le=MAX_INT_ID)],
    showtime_id: Optional[int] = Query(default=None, le=MAX_INT_ID),
    use_case: HallQueryUseCase = Depends(HallQueryUseCase.depends),
) -> HallWithSeatsResponse:
    hall = await use_case.get_hall_with_seats(hall_id=hall_id, showtime_id=showtime_id)
    return HallWithSeatsResponse.from_entity(hall)


@router.get('/{hall_id}/size')
@Logger.io
async def get_hall_size(
    hall_id: Annotated[int, Path(le=MAX_INT_ID)],
    use_case: HallQueryUseCase = Depends(HallQueryUseCase.depends),
) -> HallSizeResponse:
    dimensions = await use_case.get_hall_size(hall_id=hall_id)
    return HallSizeResponse.from_value(dimensions)
