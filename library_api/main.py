from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from library_api.core.config import settings
from library_api.core.logger import setup_logging
from library_api.middleware.cors import configure_cors
from library_api.middleware.logging import RequestLoggerMiddleware
from library_api.middleware import error_handler
from library_api.utils.errors import ApiError

# Routers
from library_api.routers import auth as auth_router
from library_api.routers import users as users_router
from library_api.routers import authors as authors_router
from library_api.routers import categories as categories_router
from library_api.routers import health as health_router


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance."""
    setup_logging(settings.LOG_LEVEL)
    description = (
        "Library API.\n\n"
        "This service provides authentication, user, author and category management endpoints."
    )

    openapi_tags = [
        {"name": "authentication", "description": "Register, login, token refresh, logout and profile."},
        {"name": "users", "description": "User accounts and administration."},
        {"name": "authors", "description": "Author catalogue."},
        {"name": "categories", "description": "Book categories."},
        {"name": "health", "description": "Health checks and service status endpoints."},
    ]

    app = FastAPI(
        title=settings.APP_NAME,
        version="0.1.0",
        description=description,
        openapi_tags=openapi_tags,
    )

    # Middleware
    configure_cors(app)
    app.add_middleware(RequestLoggerMiddleware)

    # Exception handlers
    app.add_exception_handler(ApiError, error_handler.api_error_handler)
    app.add_exception_handler(StarletteHTTPException, error_handler.http_exception_handler)
    app.add_exception_handler(RequestValidationError, error_handler.validation_exception_handler)
    app.add_exception_handler(Exception, error_handler.unhandled_exception_handler)

    # Include routers
    app.include_router(health_router.router)
    for module in (auth_router, users_router, authors_router, categories_router):
        app.include_router(module.router, prefix=settings.API_PREFIX)

    return app


app = create_app()
