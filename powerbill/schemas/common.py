"""Common schemas shared across the API."""

from math import ceil

from pydantic import BaseModel

from powerbill.filters.types import FilterResult


class PaginatedResponse(BaseModel):
    """Base paginated response."""

    total: int
    page: int
    size: int
    pages: int

    @classmethod
    def paginate(cls, *, items: list, total: int, page: int, size: int, **kwargs):
        """Build a paginated response with automatic page count."""
        return cls(
            items=items,
            total=total,
            page=page,
            size=size,
            pages=ceil(total / size) if size > 0 else 0,
            **kwargs,
        )

    @classmethod
    def from_filter_result(cls, *, items: list, total: int, result: FilterResult, **kwargs):
        return cls.paginate(items=items, total=total, page=result.page, size=result.limit, **kwargs)


class MessageResponse(BaseModel):
    message: str
