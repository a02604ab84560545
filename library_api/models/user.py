from sqlalchemy import Column, String, Boolean
from sqlalchemy.orm import relationship, deferred, validates
from library_api.core.constants import UserRole, UserStatus
from library_api.core.database import Base
from library_api.models.base import IDMixin, TimestampMixin


class User(IDMixin, TimestampMixin, Base):
    __tablename__ = "users"

    username = Column(String(255), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    # Only loaded when a query asks for it with undefer()
    password_hash = deferred(Column(String(255), nullable=False))

    full_name = Column(String(255), nullable=True)
    phone_number = Column(String(20), nullable=True)

    role = Column(String(20), default=UserRole.USER.value, index=True, nullable=False)
    status = Column(String(20), default=UserStatus.PENDING.value, index=True, nullable=False)
    is_active = Column(Boolean, default=False, nullable=False)

    refresh_tokens = relationship("RefreshToken", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User {self.username}>"

    @property
    def can_authenticate(self) -> bool:
        return bool(self.is_active) and self.status == UserStatus.ACTIVE.value

    @validates("role", "status")
    def normalize_enum(self, key, value):
        # Accept enum members as well as their plain string values
        return getattr(value, "value", value)
