"""Category endpoints."""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from library_api.core.constants import UserRole
from library_api.core.database import get_db
from library_api.core.security import TokenPayload
from library_api.dependencies.auth import get_current_user, require_roles
from library_api.schemas.category import CategoryCreate, CategoryRead, CategoryUpdate
from library_api.services.category_service import CategoryService
from library_api.schemas.common import ERROR_RESPONSES, SuccessResponse
from library_api.utils.helpers import format_response

router = APIRouter(prefix="/categories", tags=["categories"], responses=ERROR_RESPONSES)

require_admin = require_roles(UserRole.ADMIN)


def _view(category) -> dict:
    return CategoryRead.model_validate(category).model_dump(by_alias=True, mode="json")


@router.get("", response_model=SuccessResponse)
def list_categories(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = None,
    is_active: Optional[bool] = Query(None, alias="isActive"),
    current_user: TokenPayload = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    categories, pagination = CategoryService.list_categories(
        db, page=page, limit=limit, search=search, is_active=is_active
    )
    return format_response(
        "Categories retrieved successfully",
        {"categories": [_view(c) for c in categories], "pagination": pagination.model_dump(by_alias=True)},
    )


@router.get("/{category_id}", response_model=SuccessResponse)
def get_category(
    category_id: str,
    current_user: TokenPayload = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    category = CategoryService.get_category(db, category_id)
    return format_response("Category retrieved successfully", _view(category))


@router.post("", status_code=201, response_model=SuccessResponse)
def create_category(
    payload: CategoryCreate,
    current_admin: TokenPayload = Depends(require_admin),
    db: Session = Depends(get_db),
):
    category = CategoryService.create_category(db, payload)
    return format_response("Category created successfully", _view(category))


@router.put("/{category_id}", response_model=SuccessResponse)
def update_category(
    category_id: str,
    payload: CategoryUpdate,
    current_admin: TokenPayload = Depends(require_admin),
    db: Session = Depends(get_db),
):
    category = CategoryService.update_category(db, category_id, payload)
    return format_response("Category updated successfully", _view(category))


@router.patch("/{category_id}/activate", response_model=SuccessResponse)
def activate_category(
    category_id: str,
    current_admin: TokenPayload = Depends(require_admin),
    db: Session = Depends(get_db),
):
    category = CategoryService.set_active(db, category_id, True)
    return format_response("Category activated successfully", _view(category))


@router.patch("/{category_id}/deactivate", response_model=SuccessResponse)
def deactivate_category(
    category_id: str,
    current_admin: TokenPayload = Depends(require_admin),
    db: Session = Depends(get_db),
):
    category = CategoryService.set_active(db, category_id, False)
    return format_response("Category deactivated successfully", _view(category))


@router.delete("/{category_id}", response_model=SuccessResponse)
def delete_category(
    category_id: str,
    current_admin: TokenPayload = Depends(require_admin),
    db: Session = Depends(get_db),
):
    CategoryService.delete_category(db, category_id)
    return format_response("Category deleted successfully", {})
