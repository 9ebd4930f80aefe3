# app/core/listing.py
import math
from typing import Any, Iterable, Sequence, TypeVar

from app.schemas.common import Page

T = TypeVar("T")


def matches(item: Any, term: str | None, fields: Iterable[str]) -> bool:
    """
    Case-insensitive substring match of `term` against any of `fields`.

    - blank / missing term matches everything
    - fields that are None on the item are skipped
    - dotted names read nested attributes, e.g. "customer.email"
    """
    needle = (term or "").strip().lower()
    if not needle:
        return True

    for field in fields:
        value: Any = item
        for part in field.split("."):
            value = getattr(value, part, None)
            if value is None:
                break
        if value is not None and needle in str(value).lower():
            return True
    return False


def filter_items(items: Iterable[T], term: str | None, fields: Sequence[str]) -> list[T]:
    return [it for it in items if matches(it, term, fields)]


def paginate(items: Sequence[T], page: int, page_size: int) -> Page[T]:
    """
    Slice a fully-fetched list into 1-based fixed-size pages.

    Pages past the end come back with no items.
    """
    if page < 1:
        raise ValueError("page must be >= 1")
    if page_size < 1:
        raise ValueError("page_size must be >= 1")

    total = len(items)
    start = (page - 1) * page_size
    return Page(
        items=list(items[start : start + page_size]),
        total=total,
        page=page,
        page_size=page_size,
        total_pages=math.ceil(total / page_size),
    )
