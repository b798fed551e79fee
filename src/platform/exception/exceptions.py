class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class ForbiddenError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class AuthenticationError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 401)


# ========== Reservation engine ==========


class SeatsUnavailableError(ConflictError):
    """At least one requested seat is held by a CONFIRMED booking of the showtime."""

    def __init__(self, message: str = 'One or more seats are already booked') -> None:
        super().__init__(message)


class ScheduleConflictError(ConflictError):
    """Another showtime of the hall starts inside the exclusivity window."""

    def __init__(
        self, message: str = 'Hall already has a showtime within the exclusivity window'
    ) -> None:
        super().__init__(message)


class InvalidTransitionError(DomainError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 400)
