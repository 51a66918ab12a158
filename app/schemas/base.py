"""Shared schema building blocks.

Request and response bodies use camelCase on the wire and snake_case in
Python. Every success body carries ``success: true``.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base schema with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SuccessResponse(CamelModel, Generic[T]):
    """Single-object success envelope."""

    success: bool = True
    data: T


class MessageResponse(CamelModel):
    """Success envelope carrying only a message."""

    success: bool = True
    message: str


class Pagination(CamelModel):
    """Page metadata for list responses."""

    current: int
    total: int = Field(..., description="Total number of pages")
    count: int = Field(..., description="Items on this page")
    total_items: int


class PaginatedResponse(CamelModel, Generic[T]):
    """Paged list envelope."""

    success: bool = True
    items: list[T]
    pagination: Pagination


def build_pagination(page: int, limit: int, total_items: int, count: int) -> Pagination:
    """Compute page metadata from a total count."""
    pages = (total_items + limit - 1) // limit if limit else 0
    return Pagination(current=page, total=pages, count=count, total_items=total_items)
