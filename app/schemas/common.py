# app/schemas/common.py
from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """
    One page of a filtered list.

    `total` counts the filtered set, not just this page.
    """

    items: list[T]
    total: int
    page: int
    page_size: int
    total_pages: int
