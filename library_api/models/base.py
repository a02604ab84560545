"""Base SQLAlchemy model utilities."""
import uuid
from sqlalchemy import Column, DateTime, String
from library_api.utils.helpers import utcnow


class TimestampMixin:
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


class IDMixin:
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
