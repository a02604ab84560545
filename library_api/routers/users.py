"""User management endpoints."""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from library_api.core.constants import UserRole, UserStatus
from library_api.core.database import get_db
from library_api.core.security import PasswordHasher, TokenPayload
from library_api.dependencies.auth import get_current_user, get_password_hasher, require_roles
from library_api.schemas.user import UserCreate, UserRead, UserUpdate
from library_api.services.user_service import UserService
from library_api.schemas.common import ERROR_RESPONSES, SuccessResponse
from library_api.utils.helpers import format_response

router = APIRouter(prefix="/users", tags=["users"], responses=ERROR_RESPONSES)

require_admin = require_roles(UserRole.ADMIN)


def _view(user) -> dict:
    return UserRead.model_validate(user).model_dump(by_alias=True, mode="json")


@router.get("", response_model=SuccessResponse)
def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    role: Optional[UserRole] = None,
    status: Optional[UserStatus] = None,
    search: Optional[str] = None,
    current_user: TokenPayload = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    users, pagination = UserService.list_users(
        db,
        page=page,
        limit=limit,
        role=role.value if role else None,
        status=status.value if status else None,
        search=search,
    )
    return format_response(
        "Users retrieved successfully",
        {"users": [_view(u) for u in users], "pagination": pagination.model_dump(by_alias=True)},
    )


@router.get("/{user_id}", response_model=SuccessResponse)
def get_user(
    user_id: str,
    current_user: TokenPayload = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return format_response("User retrieved successfully", _view(UserService.get_user(db, user_id)))


@router.post("", status_code=201, response_model=SuccessResponse)
def create_user(
    payload: UserCreate,
    current_admin: TokenPayload = Depends(require_admin),
    db: Session = Depends(get_db),
    passwords: PasswordHasher = Depends(get_password_hasher),
):
    user = UserService.create_user(db, passwords, payload)
    return format_response("User created successfully", _view(user))


@router.put("/{user_id}", response_model=SuccessResponse)
def update_user(
    user_id: str,
    payload: UserUpdate,
    current_user: TokenPayload = Depends(get_current_user),
    db: Session = Depends(get_db),
    passwords: PasswordHasher = Depends(get_password_hasher),
):
    """Users may update themselves; admins may update anyone."""
    user = UserService.update_user(db, passwords, user_id, payload, current_user)
    return format_response("User updated successfully", _view(user))


@router.patch("/{user_id}/activate", response_model=SuccessResponse)
def activate_user(
    user_id: str,
    current_admin: TokenPayload = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return format_response("User activated successfully", _view(UserService.activate_user(db, user_id)))


@router.delete("/{user_id}", response_model=SuccessResponse)
def delete_user(
    user_id: str,
    current_admin: TokenPayload = Depends(require_admin),
    db: Session = Depends(get_db),
):
    UserService.delete_user(db, user_id, current_admin)
    return format_response("User deleted successfully", {})
