from typing import List, Optional, Tuple
from sqlalchemy import or_
from sqlalchemy.orm import Session
from library_api.models.category import Category
from library_api.schemas.category import CategoryCreate, CategoryUpdate
from library_api.schemas.common import Pagination
from library_api.utils.errors import BadRequestError, NotFoundError
from library_api.utils.helpers import paginate

DUPLICATE_NAME = "Category with this name already exists"


class CategoryService:
    @staticmethod
    def list_categories(
        db: Session,
        page: int = 1,
        limit: int = 10,
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Tuple[List[Category], Pagination]:
        query = db.query(Category)
        if is_active is not None:
            query = query.filter(Category.is_active.is_(is_active))
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(Category.name.ilike(pattern), Category.description.ilike(pattern))
            )
        return paginate(query.order_by(Category.created_at.desc()), page, limit)

    @staticmethod
    def get_category(db: Session, category_id: str) -> Category:
        category = db.get(Category, category_id)
        if not category:
            raise NotFoundError("Category not found")
        return category

    @staticmethod
    def create_category(db: Session, data: CategoryCreate) -> Category:
        if db.query(Category.id).filter(Category.name == data.name).first():
            raise BadRequestError(DUPLICATE_NAME)
        category = Category(**data.model_dump())
        db.add(category)
        db.commit()
        db.refresh(category)
        return category

    @staticmethod
    def update_category(db: Session, category_id: str, data: CategoryUpdate) -> Category:
        category = CategoryService.get_category(db, category_id)
        changes = data.model_dump(exclude_unset=True)

        name = changes.get("name")
        if name and name != category.name:
            if db.query(Category.id).filter(Category.name == name).first():
                raise BadRequestError(DUPLICATE_NAME)
        for field, value in changes.items():
            if value is None and field in ("name", "is_active"):
                continue
            setattr(category, field, value)
        db.commit()
        db.refresh(category)
        return category

    @staticmethod
    def set_active(db: Session, category_id: str, active: bool) -> Category:
        category = CategoryService.get_category(db, category_id)
        if category.is_active == active:
            state = "active" if active else "inactive"
            raise BadRequestError(f"Category is already {state}")
        category.is_active = active
        db.commit()
        db.refresh(category)
        return category

    @staticmethod
    def delete_category(db: Session, category_id: str) -> None:
        category = CategoryService.get_category(db, category_id)
        db.delete(category)
        db.commit()
