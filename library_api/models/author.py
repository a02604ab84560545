from sqlalchemy import Column, String, Boolean, Date, Text
from library_api.core.database import Base
from library_api.models.base import IDMixin, TimestampMixin


class Author(IDMixin, TimestampMixin, Base):
    __tablename__ = "authors"

    name = Column(String(255), unique=True, index=True, nullable=False)
    bio = Column(Text, nullable=True)
    birth_date = Column(Date, nullable=True)
    nationality = Column(String(100), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<Author {self.name}>"
