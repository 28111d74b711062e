"""
Shared schemas: response envelopes and pagination
"""
import math
from dataclasses import dataclass
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ecommerce_api.config import settings

T = TypeVar("T")


class ApiModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


@dataclass
class Page(Generic[T]):
    """One page of results as returned by the services"""

    items: List[T]
    total: int
    page: int
    limit: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


class Pagination(ApiModel):
    page: int
    limit: int
    total: int
    total_pages: int


class ApiResponse(ApiModel, Generic[T]):
    """Success envelope"""

    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None


class PaginatedResponse(ApiModel, Generic[T]):
    """Success envelope for paginated listings"""

    success: bool = True
    data: List[T]
    pagination: Pagination
    message: Optional[str] = None


class ErrorBody(ApiModel):
    name: str
    message: str
    details: Optional[Any] = None


class ErrorResponse(ApiModel):
    """Error envelope"""

    success: bool = False
    message: str
    error: ErrorBody


def ok(data: Any = None, message: Optional[str] = None) -> ApiResponse:
    return ApiResponse(data=data, message=message)


def paginated(page: Page, message: Optional[str] = None) -> PaginatedResponse:
    return PaginatedResponse(
        data=page.items,
        pagination=Pagination(
            page=page.page,
            limit=page.limit,
            total=page.total,
            total_pages=page.total_pages,
        ),
        message=message,
    )


def page_window(page: Optional[int], limit: Optional[int]) -> tuple:
    """Normalise 1-indexed page/limit values to the configured bounds"""
    page = max(page or 1, 1)
    limit = min(max(limit or settings.DEFAULT_PAGE_SIZE, 1), settings.MAX_PAGE_SIZE)
    return page, limit
