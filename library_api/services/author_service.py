from typing import List, Optional, Tuple
from sqlalchemy import or_
from sqlalchemy.orm import Session
from library_api.models.author import Author
from library_api.schemas.author import AuthorCreate, AuthorUpdate
from library_api.schemas.common import Pagination
from library_api.utils.errors import BadRequestError, NotFoundError
from library_api.utils.helpers import paginate

DUPLICATE_NAME = "Author with this name already exists"


class AuthorService:
    @staticmethod
    def list_authors(
        db: Session,
        page: int = 1,
        limit: int = 10,
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Tuple[List[Author], Pagination]:
        query = db.query(Author)
        if is_active is not None:
            query = query.filter(Author.is_active.is_(is_active))
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(
                    Author.name.ilike(pattern),
                    Author.bio.ilike(pattern),
                    Author.nationality.ilike(pattern),
                )
            )
        return paginate(query.order_by(Author.created_at.desc()), page, limit)

    @staticmethod
    def get_author(db: Session, author_id: str) -> Author:
        author = db.get(Author, author_id)
        if not author:
            raise NotFoundError("Author not found")
        return author

    @staticmethod
    def create_author(db: Session, data: AuthorCreate) -> Author:
        if db.query(Author.id).filter(Author.name == data.name).first():
            raise BadRequestError(DUPLICATE_NAME)
        author = Author(**data.model_dump())
        db.add(author)
        db.commit()
        db.refresh(author)
        return author

    @staticmethod
    def update_author(db: Session, author_id: str, data: AuthorUpdate) -> Author:
        author = AuthorService.get_author(db, author_id)
        changes = data.model_dump(exclude_unset=True)

        name = changes.get("name")
        if name and name != author.name:
            if db.query(Author.id).filter(Author.name == name).first():
                raise BadRequestError(DUPLICATE_NAME)
        for field, value in changes.items():
            if value is None and field in ("name", "is_active"):
                continue
            setattr(author, field, value)
        db.commit()
        db.refresh(author)
        return author

    @staticmethod
    def set_active(db: Session, author_id: str, active: bool) -> Author:
        author = AuthorService.get_author(db, author_id)
        if author.is_active == active:
            state = "active" if active else "inactive"
            raise BadRequestError(f"Author is already {state}")
        author.is_active = active
        db.commit()
        db.refresh(author)
        return author

    @staticmethod
    def delete_author(db: Session, author_id: str) -> None:
        author = AuthorService.get_author(db, author_id)
        db.delete(author)
        db.commit()
