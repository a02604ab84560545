"""Persisted refresh tokens, the only revocable credential."""
from sqlalchemy import Column, String, DateTime, Boolean, Text, ForeignKey
from sqlalchemy.orm import relationship
from library_api.core.database import Base
from library_api.models.base import IDMixin, TimestampMixin


class RefreshToken(IDMixin, TimestampMixin, Base):
    __tablename__ = "refresh_tokens"

    token = Column(Text, nullable=False)
    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    expires_at = Column(DateTime, nullable=False)
    is_revoked = Column(Boolean, default=False, nullable=False, index=True)

    user = relationship("User", back_populates="refresh_tokens")

    def __repr__(self):
        return f"<RefreshToken user={self.user_id} revoked={self.is_revoked}>"
