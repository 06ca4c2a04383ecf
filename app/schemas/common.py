"""Shared response schemas."""
from typing import Any, Literal

from pydantic import BaseModel


class PaginationMeta(BaseModel):
    total: int
    page: int
    per_page: int
    has_next: bool

    @classmethod
    def build(cls, total: int, page: int, per_page: int) -> "PaginationMeta":
        return cls(total=total, page=page, per_page=per_page, has_next=page * per_page < total)


class APIResponse(BaseModel):
    status: Literal["success", "error"]
    data: Any = None
    message: str | None = None
    pagination: PaginationMeta | None = None


class ErrorDetail(BaseModel):
    """RFC 7807 Problem Details."""
    type: str = "about:blank"
    title: str
    status: int
    detail: str
    instance: str | None = None


def reject_null(value: Any) -> Any:
    """Before-validator for partial updates: the field may be omitted but not sent as null."""
    if value is None:
        raise ValueError("This field cannot be null")
    return value
