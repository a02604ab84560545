"""ORM models."""

__all__ = [
    "base",
    "user",
    "refresh_token",
    "author",
    "category",
]
