"""Common/shared schemas for pagination and responses."""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Any, Optional


class CamelModel(BaseModel):
    """Base model exchanging camelCase JSON while keeping snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int


class SuccessResponse(BaseModel):
    success: bool = True
    message: str
    data: Optional[Any] = None


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    detail: Any


ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}
