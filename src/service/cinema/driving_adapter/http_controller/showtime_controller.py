from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Path, Query, Response, status
from opentelemetry import trace

from src.platform.constant.db_limit import MAX_INT_ID
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.create_showtime_use_case import CreateShowtimeUseCase
from src.service.cinema.app.command.delete_showtime_use_case import DeleteShowtimeUseCase
from src.service.cinema.app.command.update_showtime_use_case import UpdateShowtimeUseCase
from src.service.cinema.app.query.list_showtimes_use_case import ListShowtimesUseCase
from src.service.cinema.domain.entity.user_entity import UserEntity
from src.service.cinema.driving_adapter.http_controller.auth.role_auth import require_admin
from src.service.cinema.driving_adapter.http_controller.schema.showtime_schema import (
    MovieShowtimesResponse,
    ShowtimeCreateRequest,
    ShowtimeFilterOptionsResponse,
    ShowtimeResponse,
    ShowtimeUpdateRequest,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.get('/filters')
@Logger.io
async def get_showtime_filter_options(
    use_case: ListShowtimesUseCase = Depends(ListShowtimesUseCase.depends),
) -> ShowtimeFilterOptionsResponse:
    options = await use_case.get_filter_options()
    return ShowtimeFilterOptionsResponse.from_dto(options)


@router.get('', response_model=List[MovieShowtimesResponse])
@Logger.io
async def list_showtimes(
    date: Optional[str] = Query(default=None, description='YYYY-MM-DD (UTC day)'),
    time_start: Optional[str] = Query(default=None, description='HH:MM, inclusive'),
    time_end: Optional[str] = Query(default=None, description='HH:MM, exclusive'),
    genre_id: Optional[int] = Query(default=None, le=MAX_INT_ID),
    movie_id: Optional[int] = Query(default=None, le=MAX_INT_ID),
    use_case: ListShowtimesUseCase = Depends(ListShowtimesUseCase.depends),
) -> List[MovieShowtimesResponse]:
    groups = await use_case.list_grouped_by_movie(
        date=date,
        time_start=time_start,
        time_end=time_end,
        genre_id=genre_id,
        movie_id=movie_id,
    )
    return [MovieShowtimesResponse.from_dto(group) for group in groups]


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_showtime(
    request: ShowtimeCreateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: CreateShowtimeUseCase = Depends(CreateShowtimeUseCase.depends),
) -> ShowtimeResponse:
    with tracer.start_as_current_span('controller.create_showtime') as span:
        span.set_attribute('hall.id', request.hall_id)
        span.set_attribute('movie.id', request.movie_id)

        showtime = await use_case.create_showtime(
            movie_id=request.movie_id,
            hall_id=request.hall_id,
            start_time=request.time,
            price=request.price,
        )
        return ShowtimeResponse.from_entity(showtime)


@router.put('/{showtime_id}')
@Logger.io
async def update_showtime(
    showtime_id: Annotated[int, Path(le=MAX_INT_ID)],
    request: ShowtimeUpdateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: UpdateShowtimeUseCase = Depends(UpdateShowtimeUseCase.depends),
) -> ShowtimeResponse:
    showtime = await use_case.update_showtime(
        showtime_id=showtime_id,
        movie_id=request.movie_id,
        hall_id=request.hall_id,
        start_time=request.time,
        price=request.price,
    )
    return ShowtimeResponse.from_entity(showtime)


@router.delete('/{showtime_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_showtime(
    showtime_id: Annotated[int, Path(le=MAX_INT_ID)],
    current_user: UserEntity = Depends(require_admin),
    use_case: DeleteShowtimeUseCase = Depends(DeleteShowtimeUseCase.depends),
) -> Response:
    await use_case.delete_showtime(showtime_id=showtime_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
