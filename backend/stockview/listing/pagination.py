"""Page slicing for list views. Page indexes are zero-based here."""

import math
from dataclasses import dataclass
from typing import Any, Sequence


@dataclass(frozen=True)
class Page:
    items: list[Any]
    page_index: int
    page_size: int
    total: int

    @property
    def page_count(self) -> int:
        return page_count(self.total, self.page_size)

    @property
    def has_previous(self) -> bool:
        return self.page_index > 0

    @property
    def has_next(self) -> bool:
        return self.page_index + 1 < self.page_count


def page_count(total: int, page_size: int) -> int:
    return math.ceil(total / page_size) if total else 0


def clamp_page_index(page_index: int, total: int, page_size: int) -> int:
    """Keep the index on an existing page, e.g. after deletes shrink the list."""
    last = max(0, page_count(total, page_size) - 1)
    return min(max(page_index, 0), last)


def paginate(records: Sequence[Any], page_index: int, page_size: int) -> Page:
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")
    total = len(records)
    page_index = clamp_page_index(page_index, total, page_size)
    start = page_index * page_size
    return Page(
        items=list(records[start:start + page_size]),
        page_index=page_index,
        page_size=page_size,
        total=total,
    )
