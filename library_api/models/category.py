from sqlalchemy import Column, String, Boolean, Text
from library_api.core.database import Base
from library_api.models.base import IDMixin, TimestampMixin


class Category(IDMixin, TimestampMixin, Base):
    __tablename__ = "categories"

    name = Column(String(255), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<Category {self.name}>"
