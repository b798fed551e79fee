from typing import Any

from src.service.cinema.domain.entity.hall_entity import Hall
from src.service.cinema.domain.entity.user_entity import UserEntity
from src.service.cinema.domain.enum.user_role import UserRole
from src.service.cinema.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


def bearer_headers(*, user_id: int, role: UserRole = UserRole.USER, email: str = '') -> dict[str, str]:
    """Authorization header with a token signed by this service's secret."""
    token = JwtAuth().create_jwt_token(UserEntity(id=user_id, role=role, email=email))
    return {'Authorization': f'Bearer {token}'}


def seat_id(hall: Hall, row: int, number: int) -> int:
    for seat in hall.seats:
        if seat.position == (row, number):
            return seat.id
    raise AssertionError(f'Seat ({row},{number}) not found in hall {hall.name}')


def assert_response_status(response: Any, expected_status: int, message: str | None = None) -> None:
    assert response.status_code == expected_status, (
        message or f'Expected {expected_status}, got {response.status_code}: {response.text}'
    )
