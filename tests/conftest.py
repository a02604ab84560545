"""Pytest fixtures for async FastAPI testing.

Points the app at a throwaway SQLite database, recreates the schema for
every test and provides an ``httpx.AsyncClient`` bound to the ASGI app.
Environment variables are set at import time so ``library_api`` settings
pick them up before any application module is imported.
"""
import os
import tempfile
import uuid

import pytest

_TEST_DIR = tempfile.mkdtemp(prefix="library-api-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TEST_DIR, 'test.db')}"
os.environ["JWT_ACCESS_TOKEN_SECRET"] = "test-access-secret"
os.environ["JWT_REFRESH_TOKEN_SECRET"] = "test-refresh-secret"
os.environ["BCRYPT_SALT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"


@pytest.fixture
def prepare_database():
    """Create a clean schema for each test."""
    from library_api.core.database import engine, Base

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    yield

    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session(prepare_database):
    """Yield a SQLAlchemy session for direct DB access in tests."""
    from library_api.core.database import SessionLocal

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def passwords():
    from library_api.dependencies.auth import get_password_hasher

    return get_password_hasher()


@pytest.fixture
def token_codec():
    from library_api.dependencies.auth import get_token_codec

    return get_token_codec()


@pytest.fixture
async def async_client(prepare_database):
    """Provide an httpx AsyncClient configured with the FastAPI app."""
    from httpx import ASGITransport, AsyncClient
    from library_api.main import create_app

    app = create_app()

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        yield client


@pytest.fixture
def make_user(db_session, passwords):
    """Insert a user directly and return it."""
    from library_api.core.constants import UserRole, UserStatus
    from library_api.models.user import User

    def _make(
        role=UserRole.USER,
        status=UserStatus.ACTIVE,
        is_active=True,
        password="Password123",
        **overrides,
    ):
        suffix = uuid.uuid4().hex[:8]
        user = User(
            username=overrides.pop("username", f"user_{suffix}"),
            email=overrides.pop("email", f"user-{suffix}@example.com"),
            password_hash=passwords.hash(password),
            role=role,
            status=status,
            is_active=is_active,
            **overrides,
        )
        db_session.add(user)
        db_session.commit()
        return user

    return _make


@pytest.fixture
def auth_headers(token_codec):
    """Build an Authorization header carrying a fresh access token for ``user``."""
    from library_api.core.constants import TokenKind
    from library_api.core.security import TokenPayload

    def _headers(user):
        token = token_codec.mint(
            TokenPayload(user_id=user.id, email=user.email, role=user.role),
            TokenKind.ACCESS,
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers
