from enum import StrEnum


class UserRole(StrEnum):
    USER = 'USER'
    ADMIN = 'ADMIN'
