import attrs

from src.service.cinema.domain.enum.user_role import UserRole


@attrs.define(frozen=True)
class UserEntity:
    """Caller identity carried by the bearer token; users live in the auth service."""

    id: int
    role: UserRole = UserRole.USER
    email: str = ''

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
