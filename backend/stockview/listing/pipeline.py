"""Filter, sort and paginate a collection for one list view."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Sequence

from stockview.listing.filters import filter_records
from stockview.listing.pagination import Page, clamp_page_index, paginate
from stockview.listing.query_state import ListQuery
from stockview.listing.sorting import sort_records


@dataclass(frozen=True)
class Listing:
    page: Page
    query: ListQuery


def apply_query(records: Sequence[Any], query: ListQuery, now: datetime | None = None) -> list[Any]:
    """Filtered and sorted rows, before pagination."""
    filtered = filter_records(records, query.view, query.search, query.filters, now=now)
    return sort_records(filtered, query.view, query.sort)


def run_listing(records: Sequence[Any], query: ListQuery, now: datetime | None = None) -> Listing:
    """Produce the visible page for ``query``.

    A page past the end (the list shrank since the URL was made) is clamped
    to the last page and the returned query reflects that.
    """
    ordered = apply_query(records, query, now=now)
    page_index = clamp_page_index(query.page_index, len(ordered), query.size)
    if page_index != query.page_index:
        query = query.with_page(page_index + 1)
    return Listing(page=paginate(ordered, page_index, query.size), query=query)
