"""Service layer package."""

__all__ = [
    "auth_service",
    "refresh_token_service",
    "user_service",
    "author_service",
    "category_service",
]
