"""Application constants such as user roles, statuses and token kinds."""
from enum import Enum


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


class UserStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


class TokenKind(str, Enum):
    ACCESS = "access"
    REFRESH = "refresh"
