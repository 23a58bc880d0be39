# app/domain/common.py
import math
from datetime import datetime, timezone
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.utils.settings import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

T = TypeVar("T")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(CamelModel, Generic[T]):
    """Jednolita koperta dla wszystkich odpowiedzi API."""

    success: bool
    message: str = ""
    data: Optional[T] = None
    errors: List[str] = Field(default_factory=list)
    status_code: int = 200
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def ok(cls, data=None, message: str = "Operation completed successfully", status_code: int = 200):
        return cls(success=True, message=message, data=data, status_code=status_code)

    @classmethod
    def error(cls, message: str, errors: list[str] | None = None, status_code: int = 400):
        return cls(success=False, message=message, errors=errors or [], status_code=status_code)


class PaginatedResponse(CamelModel, Generic[T]):
    items: List[T] = Field(default_factory=list)
    total_count: int = 0
    page_number: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    total_pages: int = 0
    has_next_page: bool = False
    has_previous_page: bool = False

    @classmethod
    def create(cls, items: list, total_count: int, page_number: int, page_size: int):
        total_pages = math.ceil(total_count / page_size)
        return cls(
            items=items,
            total_count=total_count,
            page_number=page_number,
            page_size=page_size,
            total_pages=total_pages,
            has_next_page=page_number < total_pages,
            has_previous_page=page_number > 1,
        )


class PaginationParams(BaseModel):
    """Parametry stronicowania, page_size obcinany do MAX_PAGE_SIZE."""

    page_number: int = Field(1, ge=1)
    page_size: int = Field(DEFAULT_PAGE_SIZE, ge=1)
    search_term: Optional[str] = None

    @field_validator("page_size")
    @classmethod
    def clamp_page_size(cls, v: int) -> int:
        return min(v, MAX_PAGE_SIZE)
