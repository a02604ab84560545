"""Custom error definitions for API exceptions."""
from fastapi import HTTPException
from starlette import status


class ApiError(HTTPException):
    """Base class for errors rendered into the JSON error envelope."""

    error_type = "ApiError"
    status_code_default = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal error"

    def __init__(self, detail: str = None):
        super().__init__(
            status_code=self.status_code_default,
            detail=detail or self.default_detail,
        )

    def __str__(self) -> str:
        return str(self.detail)


class BadRequestError(ApiError):
    error_type = "BadRequestError"
    status_code_default = status.HTTP_400_BAD_REQUEST
    default_detail = "Bad request"


class AuthFailureError(ApiError):
    error_type = "AuthFailureError"
    status_code_default = status.HTTP_401_UNAUTHORIZED
    default_detail = "Invalid credentials"


class BadTokenError(ApiError):
    error_type = "BadTokenError"
    status_code_default = status.HTTP_401_UNAUTHORIZED
    default_detail = "Token is not valid"


class TokenExpiredError(ApiError):
    error_type = "TokenExpiredError"
    status_code_default = status.HTTP_401_UNAUTHORIZED
    default_detail = "Token has expired"


class ForbiddenError(ApiError):
    error_type = "ForbiddenError"
    status_code_default = status.HTTP_403_FORBIDDEN
    default_detail = "Permission denied"


class NotFoundError(ApiError):
    error_type = "NotFoundError"
    status_code_default = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class InternalError(ApiError):
    error_type = "InternalError"
