import os
import re
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional, List
from dotenv import load_dotenv

load_dotenv()

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNITS = {
    "": "seconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
}


def parse_duration(value: str) -> timedelta:
    """Parse a lifetime such as ``15m`` or ``7d`` into a timedelta.

    A bare number is read as seconds.
    """
    match = _DURATION_RE.match(str(value))
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit]: int(amount)})


@dataclass(frozen=True)
class JWTConfig:
    access_token_secret: str
    refresh_token_secret: str
    access_token_lifetime: timedelta
    refresh_token_lifetime: timedelta
    algorithm: str = "HS256"
    issuer: str = "library-api"
    audience: str = "library-api-users"


@dataclass(frozen=True)
class PasswordConfig:
    salt_rounds: int = 12


class Settings:
    ENV: str = os.getenv("ENV", "development")
    APP_NAME: str = os.getenv("APP_NAME", "Library API")
    API_PREFIX: str = os.getenv("API_PREFIX", "/api")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./library.db")
    DATABASE_ECHO: bool = os.getenv("DATABASE_ECHO", "False").lower() == "true"
    DATABASE_POOL_SIZE: int = int(os.getenv("DATABASE_POOL_SIZE", 20))
    DATABASE_MAX_OVERFLOW: int = int(os.getenv("DATABASE_MAX_OVERFLOW", 10))

    # JWT
    JWT_ACCESS_TOKEN_SECRET: str = os.getenv(
        "JWT_ACCESS_TOKEN_SECRET", "your-access-token-secret-change-in-production"
    )
    JWT_REFRESH_TOKEN_SECRET: str = os.getenv(
        "JWT_REFRESH_TOKEN_SECRET", "your-refresh-token-secret-change-in-production"
    )
    JWT_ACCESS_TOKEN_EXPIRATION: str = os.getenv("JWT_ACCESS_TOKEN_EXPIRATION", "15m")
    JWT_REFRESH_TOKEN_EXPIRATION: str = os.getenv("JWT_REFRESH_TOKEN_EXPIRATION", "7d")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")

    # Passwords
    BCRYPT_SALT_ROUNDS: int = int(os.getenv("BCRYPT_SALT_ROUNDS", 12))

    # CORS
    CORS_URL: Optional[str] = os.getenv("CORS_URL")

    @property
    def cors_origins(self) -> List[str]:
        if not self.CORS_URL:
            return []
        return [origin.strip() for origin in self.CORS_URL.split(",") if origin.strip()]

    @property
    def jwt(self) -> JWTConfig:
        return JWTConfig(
            access_token_secret=self.JWT_ACCESS_TOKEN_SECRET,
            refresh_token_secret=self.JWT_REFRESH_TOKEN_SECRET,
            access_token_lifetime=parse_duration(self.JWT_ACCESS_TOKEN_EXPIRATION),
            refresh_token_lifetime=parse_duration(self.JWT_REFRESH_TOKEN_EXPIRATION),
            algorithm=self.JWT_ALGORITHM,
        )

    @property
    def password(self) -> PasswordConfig:
        return PasswordConfig(salt_rounds=self.BCRYPT_SALT_ROUNDS)


settings = Settings()
