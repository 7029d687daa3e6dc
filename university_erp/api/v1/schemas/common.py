"""Shared response envelope, pagination and camelCase base model"""

import math
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model exposing snake_case fields as camelCase JSON"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class ErrorBody(BaseModel):
    code: str
    message: str
    details: Optional[Any] = None


class ApiResponse(BaseModel, Generic[T]):
    """Envelope wrapping every API response"""

    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        offset = (page - 1) * limit
        return cls(
            page=page,
            limit=limit,
            total=total,
            total_pages=math.ceil(total / limit) if limit else 0,
            has_next=offset + limit < total,
            has_prev=page > 1,
        )


class Page(CamelModel, Generic[T]):
    items: List[T]
    pagination: Pagination


def ok(data: Any = None, message: Optional[str] = None) -> dict:
    """Success envelope for a single payload"""
    return {"success": True, "data": data, "message": message}


def paged(items: List[Any], total: int, page: int, limit: int, message: Optional[str] = None) -> dict:
    """Success envelope for a page of items"""
    return ok({"items": items, "pagination": Pagination.build(page, limit, total)}, message)
