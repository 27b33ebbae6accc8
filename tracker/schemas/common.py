"""Shared schema building blocks."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model exchanged with clients in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PagedResponse(CamelModel, Generic[T]):
    """One page of results plus the metadata needed to walk the rest."""

    content: list[T]
    current_page: int
    total_pages: int
    total_elements: int
    size: int
    first: bool
    last: bool
