"""Library API: users, authors and categories behind JWT authentication."""

__version__ = "0.1.0"
