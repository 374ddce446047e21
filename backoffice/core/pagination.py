"""Pagination — slices an already-filtered result set into a paged view.

Invariants:
    - page_number is clamped to >= 1
    - Slice bounds are [(page-1)*size, page*size) clipped to [0, total_count)
    - total_pages = ceil(total_count / page_size); 0 when nothing matched
    - A page beyond total_pages is empty, not an error
    - has_prev iff 1 < page <= total_pages + 1 (the previous page holds records)
    - start_index/end_index are 1-based; both 0 on an empty page
"""

import math
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PagedResult(Generic[T]):
    """One page of a filtered result set plus navigation metadata."""
    items: list[T]
    total_count: int
    page_number: int
    page_size: int
    total_pages: int
    has_next: bool
    has_prev: bool
    start_index: int
    end_index: int


def paginate(items: Sequence[T], page_number: int, page_size: int) -> PagedResult[T]:
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    page = max(1, page_number)
    total = len(items)
    start = min((page - 1) * page_size, total)
    end = min(page * page_size, total)
    page_items = list(items[start:end])
    total_pages = math.ceil(total / page_size)
    return PagedResult(
        items=page_items,
        total_count=total,
        page_number=page,
        page_size=page_size,
        total_pages=total_pages,
        has_next=page < total_pages,
        has_prev=1 < page <= total_pages + 1,
        start_index=start + 1 if page_items else 0,
        end_index=end if page_items else 0,
    )


def parse_page_number(raw: object) -> int:
    """Lenient page parsing for query strings: anything unusable means page 1."""
    try:
        return max(1, int(str(raw).strip()))
    except (TypeError, ValueError):
        return 1
