from typing import Optional
from fastapi import APIRouter, Body, Depends
from library_api.core.security import TokenPayload
from library_api.dependencies.auth import get_auth_service, get_current_user
from library_api.schemas.auth import (
    LoginRequest, LogoutRequest, RefreshTokenRequest, RegisterRequest, TokenPairResponse,
)
from library_api.schemas.user import UserRead
from library_api.services.auth_service import AuthResult, AuthService
from library_api.schemas.common import ERROR_RESPONSES, SuccessResponse
from library_api.utils.helpers import format_response

router = APIRouter(prefix="/auth", tags=["authentication"], responses=ERROR_RESPONSES)


def _session_payload(result: AuthResult) -> dict:
    return {
        "user": UserRead.model_validate(result.user).model_dump(by_alias=True, mode="json"),
        **TokenPairResponse(
            access_token=result.tokens.access_token,
            refresh_token=result.tokens.refresh_token,
        ).model_dump(by_alias=True),
    }


@router.post("/register", status_code=201, response_model=SuccessResponse)
def register(
    request: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
):
    """
    Create an account and sign it in
    - Rejects duplicate email/username and weak passwords
    - Returns the user plus an access/refresh token pair
    """
    result = service.register(request)
    return format_response("User registered successfully", _session_payload(result))


@router.post("/login", status_code=200, response_model=SuccessResponse)
def login(
    request: LoginRequest,
    service: AuthService = Depends(get_auth_service),
):
    """Email/password login"""
    result = service.login(request)
    return format_response("Login successful", _session_payload(result))


@router.post("/refresh", status_code=200, response_model=SuccessResponse)
def refresh_tokens(
    request: RefreshTokenRequest,
    service: AuthService = Depends(get_auth_service),
):
    """Exchange a valid refresh token for a new access + refresh token pair (rotation)."""
    tokens = service.refresh(request)
    data = TokenPairResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
    ).model_dump(by_alias=True)
    return format_response("Token refreshed successfully", data)


@router.post("/logout", status_code=200, response_model=SuccessResponse)
def logout(
    request: Optional[LogoutRequest] = Body(None),
    current_user: TokenPayload = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    """Revoke the given refresh token, or every session of the caller when none is given"""
    service.logout(current_user, request.refresh_token if request else None)
    return format_response("Logout successful", {})


@router.get("/profile", status_code=200, response_model=SuccessResponse)
def profile(
    current_user: TokenPayload = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    user = service.profile(current_user)
    return format_response(
        "Profile retrieved successfully",
        UserRead.model_validate(user).model_dump(by_alias=True, mode="json"),
    )
