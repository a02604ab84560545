from typing import List, Optional, Tuple
import logging
from sqlalchemy import or_
from sqlalchemy.orm import Session
from library_api.core.constants import UserRole, UserStatus
from library_api.core.security import PasswordHasher, TokenPayload
from library_api.models.user import User
from library_api.schemas.common import Pagination
from library_api.schemas.user import UserCreate, UserUpdate
from library_api.utils.helpers import paginate
from library_api.utils.errors import BadRequestError, ForbiddenError, NotFoundError

logger = logging.getLogger(__name__)

# Fields a non-admin may not change on their own account
_ADMIN_ONLY_FIELDS = ("role", "status", "is_active")
_NON_NULLABLE_FIELDS = ("username", "email", "role", "status", "is_active")


class UserService:
    @staticmethod
    def list_users(
        db: Session,
        page: int = 1,
        limit: int = 10,
        role: Optional[str] = None,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[User], Pagination]:
        query = db.query(User)
        if role:
            query = query.filter(User.role == role)
        if status:
            query = query.filter(User.status == status)
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(
                    User.username.ilike(pattern),
                    User.email.ilike(pattern),
                    User.full_name.ilike(pattern),
                )
            )
        return paginate(query.order_by(User.created_at.desc()), page, limit)

    @staticmethod
    def get_user(db: Session, user_id: str) -> User:
        user = db.get(User, user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def _ensure_unique(db: Session, email: Optional[str], username: Optional[str]) -> None:
        if email and db.query(User.id).filter(User.email == email).first():
            raise BadRequestError("Email already registered")
        if username and db.query(User.id).filter(User.username == username).first():
            raise BadRequestError("Username already taken")

    @staticmethod
    def _checked_hash(passwords: PasswordHasher, password: str) -> str:
        strength = passwords.validate_strength(password)
        if not strength.is_valid:
            raise BadRequestError(", ".join(strength.errors))
        return passwords.hash(password)

    @staticmethod
    def create_user(db: Session, passwords: PasswordHasher, data: UserCreate) -> User:
        """Admin-created accounts start pending and inactive unless told otherwise."""
        UserService._ensure_unique(db, data.email, data.username)
        user = User(
            username=data.username,
            email=data.email,
            password_hash=UserService._checked_hash(passwords, data.password),
            full_name=data.full_name,
            phone_number=data.phone_number,
            role=data.role,
            status=data.status,
            is_active=data.status == UserStatus.ACTIVE,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info("User created by admin", extra={"user_id": user.id})
        return user

    @staticmethod
    def update_user(
        db: Session,
        passwords: PasswordHasher,
        user_id: str,
        data: UserUpdate,
        actor: TokenPayload,
    ) -> User:
        user = UserService.get_user(db, user_id)

        is_admin = actor.role == UserRole.ADMIN.value
        if not is_admin and actor.user_id != user.id:
            raise ForbiddenError("You can only update your own profile")

        changes = data.model_dump(exclude_unset=True)
        if not is_admin:
            for field in _ADMIN_ONLY_FIELDS:
                changes.pop(field, None)

        UserService._ensure_unique(
            db,
            changes.get("email") if changes.get("email") != user.email else None,
            changes.get("username") if changes.get("username") != user.username else None,
        )

        password = changes.pop("password", None)
        if password:
            user.password_hash = UserService._checked_hash(passwords, password)

        for field, value in changes.items():
            if value is None and field in _NON_NULLABLE_FIELDS:
                continue
            setattr(user, field, value)

        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def activate_user(db: Session, user_id: str) -> User:
        user = UserService.get_user(db, user_id)
        if user.can_authenticate:
            raise BadRequestError("User is already active")
        user.status = UserStatus.ACTIVE
        user.is_active = True
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def delete_user(db: Session, user_id: str, actor: TokenPayload) -> None:
        if actor.user_id == user_id:
            raise BadRequestError("You cannot delete your own account")
        user = UserService.get_user(db, user_id)
        db.delete(user)
        db.commit()
        logger.info("User deleted", extra={"user_id": user_id})
