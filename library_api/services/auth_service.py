from dataclasses import dataclass
from typing import Optional
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, undefer

from library_api.core.constants import TokenKind, UserStatus
from library_api.core.security import (
    InvalidTokenError,
    PasswordHasher,
    TokenCodec,
    TokenPair,
    TokenPayload,
)
from library_api.models.user import User
from library_api.schemas.auth import LoginRequest, RefreshTokenRequest, RegisterRequest
from library_api.services.refresh_token_service import RefreshTokenService
from library_api.utils.errors import AuthFailureError, BadRequestError, BadTokenError
from library_api.utils.helpers import utcnow

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


@dataclass
class AuthResult:
    user: User
    tokens: TokenPair


class AuthService:
    """Register/login/refresh/logout/profile use cases.

    Each call is independent; the only state shared between calls is what
    the refresh-token ledger persists.
    """

    def __init__(self, db: Session, passwords: PasswordHasher, tokens: TokenCodec):
        self.db = db
        self.passwords = passwords
        self.tokens = tokens
        self.ledger = RefreshTokenService(db)

    def register(self, data: RegisterRequest) -> AuthResult:
        """
        Create an active account and open its first session.
        - Email collisions are reported before username collisions
        - Nothing is written if the password fails the strength policy
        """
        if self.db.query(User.id).filter(User.email == data.email).first():
            raise BadRequestError("Email already registered")
        if self.db.query(User.id).filter(User.username == data.username).first():
            raise BadRequestError("Username already taken")

        strength = self.passwords.validate_strength(data.password)
        if not strength.is_valid:
            raise BadRequestError(", ".join(strength.errors))

        user = User(
            username=data.username,
            email=data.email,
            password_hash=self.passwords.hash(data.password),
            full_name=data.full_name,
            phone_number=data.phone_number,
            role=data.role,
            status=UserStatus.ACTIVE,
            is_active=True,
        )
        self.db.add(user)
        try:
            self.db.flush()
        except IntegrityError:
            # Lost a race against a concurrent registration
            self.db.rollback()
            raise BadRequestError("Username or email already registered")

        tokens = self._open_session(user)
        self.db.commit()
        logger.info("User registered", extra={"user_id": user.id})
        return AuthResult(user=user, tokens=tokens)

    def login(self, data: LoginRequest) -> AuthResult:
        """
        Email/password login
        - Unknown email, inactive account and wrong password share one error
        """
        user = (
            self.db.query(User)
            .options(undefer(User.password_hash))
            .filter(User.email == data.email)
            .first()
        )
        if not user or not user.can_authenticate:
            logger.warning("Login rejected for unknown or inactive account")
            raise AuthFailureError(INVALID_CREDENTIALS)

        if not self.passwords.verify(data.password, user.password_hash):
            logger.warning("Login rejected: wrong password", extra={"user_id": user.id})
            raise AuthFailureError(INVALID_CREDENTIALS)

        tokens = self._open_session(user)
        self.db.commit()
        logger.info("User logged in", extra={"user_id": user.id})
        return AuthResult(user=user, tokens=tokens)

    def refresh(self, data: RefreshTokenRequest) -> TokenPair:
        """
        Exchange a live refresh token for a new pair (rotation).
        - The presented token is revoked; it can succeed at most once
        """
        token = data.refresh_token
        try:
            payload = self.tokens.verify(token, TokenKind.REFRESH)
        except InvalidTokenError:
            raise BadTokenError("Invalid or expired refresh token")

        record = self.ledger.lookup(token, payload.user_id)
        if not record or record.is_revoked:
            raise BadTokenError("Refresh token not found or revoked")

        now = utcnow()
        if not self.ledger.is_live(record, now):
            self.ledger.revoke(record)
            self.db.commit()
            logger.info("Expired refresh token revoked", extra={"user_id": record.user_id})
            raise BadTokenError("Refresh token has expired")

        user = self.db.get(User, payload.user_id)
        if not user or not user.can_authenticate:
            raise AuthFailureError("User not found or inactive")

        if not self.ledger.revoke_if_live(record, now):
            # Another request rotated this token first
            self.db.rollback()
            raise BadTokenError("Refresh token not found or revoked")

        tokens = self._open_session(user)
        self.db.commit()
        logger.info("Refresh token rotated", extra={"user_id": user.id})
        return tokens

    def logout(self, identity: Optional[TokenPayload], refresh_token: Optional[str] = None) -> int:
        """Revoke one session, or every session of ``identity`` when no token is given.

        Returns the number of records revoked; never fails.
        """
        revoked = 0
        if refresh_token:
            user_id = identity.user_id if identity else None
            record = self.ledger.lookup(refresh_token, user_id)
            if record and not record.is_revoked:
                self.ledger.revoke(record)
                revoked = 1
        elif identity:
            revoked = self.ledger.revoke_all(identity.user_id)
        self.db.commit()
        logger.info(
            "User logged out",
            extra={"user_id": identity.user_id if identity else None},
        )
        return revoked

    def profile(self, identity: TokenPayload) -> User:
        user = self.db.get(User, identity.user_id)
        if not user:
            raise AuthFailureError("User not found")
        return user

    def _open_session(self, user: User) -> TokenPair:
        tokens = self.tokens.mint_pair(
            TokenPayload(user_id=user.id, email=user.email, role=user.role)
        )
        self.ledger.record_issuance(
            tokens.refresh_token,
            user.id,
            self.tokens.expires_at(TokenKind.REFRESH),
        )
        return tokens
