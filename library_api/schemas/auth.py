from pydantic import EmailStr, Field
from typing import Optional
from library_api.core.constants import UserRole
from library_api.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    """Self-service registration"""
    username: str = Field(..., min_length=3, max_length=50, pattern=r"^[a-zA-Z0-9_]+$")
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=255)
    full_name: Optional[str] = Field(None, max_length=255)
    phone_number: Optional[str] = Field(None, max_length=20)
    role: UserRole = UserRole.USER


class LoginRequest(CamelModel):
    """Email/password login request"""
    email: EmailStr
    password: str = Field(..., min_length=1)


class RefreshTokenRequest(CamelModel):
    """Request to rotate a refresh token"""
    refresh_token: str = Field(..., min_length=1)


class LogoutRequest(CamelModel):
    refresh_token: Optional[str] = Field(None, min_length=1)


class TokenPairResponse(CamelModel):
    access_token: str
    refresh_token: str
