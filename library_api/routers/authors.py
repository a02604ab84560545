"""Author endpoints. Reads need a signed-in user, writes need an admin."""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from library_api.core.constants import UserRole
from library_api.core.database import get_db
from library_api.core.security import TokenPayload
from library_api.dependencies.auth import get_current_user, require_roles
from library_api.schemas.author import AuthorCreate, AuthorRead, AuthorUpdate
from library_api.services.author_service import AuthorService
from library_api.schemas.common import ERROR_RESPONSES, SuccessResponse
from library_api.utils.helpers import format_response

router = APIRouter(prefix="/authors", tags=["authors"], responses=ERROR_RESPONSES)

require_admin = require_roles(UserRole.ADMIN)


def _view(author) -> dict:
    return AuthorRead.model_validate(author).model_dump(by_alias=True, mode="json")


@router.get("", response_model=SuccessResponse)
def list_authors(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = None,
    is_active: Optional[bool] = Query(None, alias="isActive"),
    current_user: TokenPayload = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    authors, pagination = AuthorService.list_authors(
        db, page=page, limit=limit, search=search, is_active=is_active
    )
    return format_response(
        "Authors retrieved successfully",
        {"authors": [_view(a) for a in authors], "pagination": pagination.model_dump(by_alias=True)},
    )


@router.get("/{author_id}", response_model=SuccessResponse)
def get_author(
    author_id: str,
    current_user: TokenPayload = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return format_response("Author retrieved successfully", _view(AuthorService.get_author(db, author_id)))


@router.post("", status_code=201, response_model=SuccessResponse)
def create_author(
    payload: AuthorCreate,
    current_admin: TokenPayload = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return format_response("Author created successfully", _view(AuthorService.create_author(db, payload)))


@router.put("/{author_id}", response_model=SuccessResponse)
def update_author(
    author_id: str,
    payload: AuthorUpdate,
    current_admin: TokenPayload = Depends(require_admin),
    db: Session = Depends(get_db),
):
    author = AuthorService.update_author(db, author_id, payload)
    return format_response("Author updated successfully", _view(author))


@router.patch("/{author_id}/activate", response_model=SuccessResponse)
def activate_author(
    author_id: str,
    current_admin: TokenPayload = Depends(require_admin),
    db: Session = Depends(get_db),
):
    author = AuthorService.set_active(db, author_id, True)
    return format_response("Author activated successfully", _view(author))


@router.patch("/{author_id}/deactivate", response_model=SuccessResponse)
def deactivate_author(
    author_id: str,
    current_admin: TokenPayload = Depends(require_admin),
    db: Session = Depends(get_db),
):
    author = AuthorService.set_active(db, author_id, False)
    return format_response("Author deactivated successfully", _view(author))


@router.delete("/{author_id}", response_model=SuccessResponse)
def delete_author(
    author_id: str,
    current_admin: TokenPayload = Depends(require_admin),
    db: Session = Depends(get_db),
):
    AuthorService.delete_author(db, author_id)
    return format_response("Author deleted successfully", {})
