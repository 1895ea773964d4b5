"""Shared response envelopes."""

from math import ceil
from typing import Generic, List, TypeVar

from pydantic import BaseModel, Field, computed_field


T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """One page of a list together with the unpaged total."""

    items: List[T] = Field(default_factory=list)
    total_count: int = Field(0, description="Number of rows matching the filter, across all pages")
    page: int = Field(1, ge=1)
    page_size: int = Field(10, ge=1)

    @computed_field
    @property
    def total_pages(self) -> int:
        return ceil(self.total_count / self.page_size) if self.page_size else 0

    @computed_field
    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @computed_field
    @property
    def has_previous_page(self) -> bool:
        return self.page > 1


class Message(BaseModel):
    message: str
