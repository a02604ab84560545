"""Password hashing and JWT minting/verification.

``PasswordHasher`` owns password hash computation and verification;
``TokenCodec`` owns signing and verifying access/refresh tokens. Both take
their configuration explicitly so they can be built once per process (or per
test) without reading globals.
"""
import re
import secrets
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from library_api.core.config import JWTConfig, PasswordConfig
from library_api.core.constants import TokenKind

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 255


class InvalidTokenError(Exception):
    """Signature, claims or format of a token did not check out."""


class TokenExpiredError(InvalidTokenError):
    """The token was well-formed but its ``exp`` has passed."""


@dataclass
class PasswordStrength:
    is_valid: bool
    errors: List[str] = field(default_factory=list)


class PasswordHasher:
    """bcrypt over a SHA-256 prehash, so bytes past bcrypt's 72-byte limit still count."""

    def __init__(self, config: PasswordConfig):
        self._context = CryptContext(
            schemes=["bcrypt_sha256"],
            deprecated="auto",
            bcrypt_sha256__rounds=config.salt_rounds,
        )

    def hash(self, password: str) -> str:
        if not password or not isinstance(password, str):
            raise ValueError("Password must be a non-empty string")
        return self._context.hash(password)

    def verify(self, password: str, hashed_password: str) -> bool:
        if not password or not hashed_password:
            return False
        if not isinstance(password, str):
            return False
        try:
            return self._context.verify(password, hashed_password)
        except (ValueError, TypeError):
            return False

    @staticmethod
    def validate_strength(password: str) -> PasswordStrength:
        errors = []
        if len(password) < PASSWORD_MIN_LENGTH:
            errors.append(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")
        if len(password) > PASSWORD_MAX_LENGTH:
            errors.append(f"Password must be at most {PASSWORD_MAX_LENGTH} characters long")
        if not re.search(r"[A-Za-z]", password):
            errors.append("Password must contain at least one letter")
        if not re.search(r"[0-9]", password):
            errors.append("Password must contain at least one number")
        return PasswordStrength(is_valid=not errors, errors=errors)


@dataclass(frozen=True)
class TokenPayload:
    """Identity claims embedded in every access and refresh token."""

    user_id: str
    email: str
    role: str

    def to_claims(self) -> Dict[str, Any]:
        return {"userId": self.user_id, "email": self.email, "role": self.role}

    @classmethod
    def from_claims(cls, claims: Dict[str, Any]) -> "TokenPayload":
        try:
            return cls(
                user_id=str(claims["userId"]),
                email=claims["email"],
                role=claims["role"],
            )
        except KeyError as exc:
            raise InvalidTokenError(f"Missing claim: {exc.args[0]}") from exc


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


class TokenCodec:
    def __init__(self, config: JWTConfig):
        self._config = config

    def _secret(self, kind: TokenKind) -> str:
        if kind == TokenKind.ACCESS:
            return self._config.access_token_secret
        return self._config.refresh_token_secret

    def lifetime(self, kind: TokenKind):
        if kind == TokenKind.ACCESS:
            return self._config.access_token_lifetime
        return self._config.refresh_token_lifetime

    def expires_at(self, kind: TokenKind, now: Optional[datetime] = None) -> datetime:
        """Naive UTC expiry for a token of ``kind`` minted at ``now``."""
        issued = now or datetime.now(timezone.utc)
        return (issued + self.lifetime(kind)).replace(tzinfo=None)

    def mint(
        self,
        payload: TokenPayload,
        kind: TokenKind,
        now: Optional[datetime] = None,
    ) -> str:
        issued = now or datetime.now(timezone.utc)
        claims = payload.to_claims()
        claims.update({
            "type": kind.value,
            "iss": self._config.issuer,
            "aud": self._config.audience,
            "iat": issued,
            "exp": issued + self.lifetime(kind),
            "jti": secrets.token_urlsafe(16),
        })
        return jwt.encode(claims, self._secret(kind), algorithm=self._config.algorithm)

    def mint_pair(self, payload: TokenPayload) -> TokenPair:
        return TokenPair(
            access_token=self.mint(payload, TokenKind.ACCESS),
            refresh_token=self.mint(payload, TokenKind.REFRESH),
        )

    def verify(self, token: str, kind: TokenKind) -> TokenPayload:
        if not token or not isinstance(token, str):
            raise InvalidTokenError("Token is empty")
        try:
            claims = jwt.decode(
                token,
                self._secret(kind),
                algorithms=[self._config.algorithm],
                audience=self._config.audience,
                issuer=self._config.issuer,
            )
        except ExpiredSignatureError as exc:
            raise TokenExpiredError("Token has expired") from exc
        except JWTError as exc:
            raise InvalidTokenError(str(exc)) from exc

        if claims.get("type") != kind.value:
            raise InvalidTokenError("Unexpected token type")
        return TokenPayload.from_claims(claims)
