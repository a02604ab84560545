from datetime import date, datetime
from pydantic import ConfigDict, Field
from typing import Optional
from library_api.schemas.common import CamelModel


class AuthorCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    bio: Optional[str] = None
    birth_date: Optional[date] = None
    nationality: Optional[str] = Field(None, max_length=100)
    is_active: bool = True


class AuthorUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    bio: Optional[str] = None
    birth_date: Optional[date] = None
    nationality: Optional[str] = Field(None, max_length=100)
    is_active: Optional[bool] = None


class AuthorRead(CamelModel):
    id: str
    name: str
    bio: Optional[str] = None
    birth_date: Optional[date] = None
    nationality: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
