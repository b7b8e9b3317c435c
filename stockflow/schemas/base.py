"""
Shared schema bases.
"""
from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class ApiModel(BaseModel):
    """Request body base: accepts camelCase keys as well as snake_case."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "extra": "ignore",
    }


class Pagination(BaseModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int


class Envelope(BaseModel, Generic[DataT]):
    """Response wrapper used by the stock request routes."""
    success: bool = True
    data: DataT
    message: Optional[str] = None


def build_pagination(page: int, limit: int, total: int) -> Dict[str, Any]:
    """
    Build the pagination block for list responses.

    Args:
        page: Current page (1-based)
        limit: Page size
        total: Total matching documents

    Returns:
        Pagination dict
    """
    return {
        "current_page": page,
        "total_pages": (total + limit - 1) // limit if limit else 1,
        "total_items": total,
        "items_per_page": limit,
    }


def page_to_skip(page: int, limit: int) -> int:
    return (max(page, 1) - 1) * limit


