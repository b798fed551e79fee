"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.cinema.app.command import (
    cancel_booking_use_case,
    create_booking_use_case,
    create_showtime_use_case,
    delete_showtime_use_case,
    update_booking_use_case,
    update_showtime_use_case,
)
from src.service.cinema.app.query import (
    hall_query_use_case,
    list_showtimes_use_case,
    list_user_bookings_use_case,
)
from src.service.cinema.driving_adapter.http_controller.auth import role_auth


WIRE_MODULES: list[ModuleType] = [
    create_showtime_use_case,
    update_showtime_use_case,
    delete_showtime_use_case,
    create_booking_use_case,
    update_booking_use_case,
    cancel_booking_use_case,
    list_user_bookings_use_case,
    hall_query_use_case,
    list_showtimes_use_case,
    role_auth,
]
