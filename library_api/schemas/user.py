"""User request/response schemas."""
from datetime import datetime
from pydantic import ConfigDict, EmailStr, Field
from typing import Optional
from library_api.core.constants import UserRole, UserStatus
from library_api.schemas.common import CamelModel


class UserRead(CamelModel):
    """Identity view: everything but the password hash."""
    id: str
    username: str
    email: str
    full_name: Optional[str] = None
    phone_number: Optional[str] = None
    role: str
    status: str
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class UserCreate(CamelModel):
    username: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=255)
    full_name: Optional[str] = Field(None, max_length=255)
    phone_number: Optional[str] = Field(None, max_length=20)
    role: UserRole = UserRole.USER
    status: UserStatus = UserStatus.PENDING


class UserUpdate(CamelModel):
    username: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=8, max_length=255)
    full_name: Optional[str] = Field(None, max_length=255)
    phone_number: Optional[str] = Field(None, max_length=20)
    role: Optional[UserRole] = None
    status: Optional[UserStatus] = None
    is_active: Optional[bool] = None
