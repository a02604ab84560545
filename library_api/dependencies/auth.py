"""Request authentication and role checks.

The resolved identity is returned from ``get_current_user`` and threaded into
handlers as a dependency value; nothing is stored on the request object.
"""
from functools import lru_cache
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from library_api.core import security
from library_api.core.config import settings
from library_api.core.constants import TokenKind
from library_api.core.database import get_db
from library_api.core.security import PasswordHasher, TokenCodec, TokenPayload
from library_api.services.auth_service import AuthService
from library_api.utils.errors import BadTokenError, TokenExpiredError

bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(settings.password)


@lru_cache
def get_token_codec() -> TokenCodec:
    return TokenCodec(settings.jwt)


def get_auth_service(
    db: Session = Depends(get_db),
    passwords: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenCodec = Depends(get_token_codec),
) -> AuthService:
    return AuthService(db, passwords, tokens)


def authenticate_token(token: str, tokens: TokenCodec) -> TokenPayload:
    """Verify an access token string and return its identity claims."""
    try:
        return tokens.verify(token, TokenKind.ACCESS)
    except security.TokenExpiredError:
        raise TokenExpiredError("Token has expired")
    except security.InvalidTokenError:
        raise BadTokenError("Invalid token")


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenCodec = Depends(get_token_codec),
) -> TokenPayload:
    """Verify the bearer access token and return the caller's identity"""
    if credentials is None or not credentials.credentials:
        raise BadTokenError("No token provided")
    return authenticate_token(credentials.credentials, tokens)


def require_roles(*roles: str):
    """Dependency factory rejecting callers whose role is not in ``roles``."""
    allowed = {getattr(role, "value", role) for role in roles}

    async def checker(current_user: TokenPayload = Depends(get_current_user)) -> TokenPayload:
        if current_user.role not in allowed:
            raise BadTokenError("Insufficient permissions")
        return current_user

    return checker
