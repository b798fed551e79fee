"""Cinema Domain Enums"""

from src.service.cinema.domain.enum.booking_status import ALLOWED_TRANSITIONS, BookingStatus
from src.service.cinema.domain.enum.user_role import UserRole

__all__ = ['ALLOWED_TRANSITIONS', 'BookingStatus', 'UserRole']
