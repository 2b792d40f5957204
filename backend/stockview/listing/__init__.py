"""Shared list view pipeline: URL state, filtering, sorting, pagination, statuses."""

from stockview.listing.filters import filter_records
from stockview.listing.pagination import Page, clamp_page_index, paginate
from stockview.listing.pipeline import Listing, apply_query, run_listing
from stockview.listing.query_state import ListQuery, sync_query_string
from stockview.listing.sorting import SortSpec, parse_sort, sort_records
from stockview.listing.status import classify_stock_level, classify_stock_status

__all__ = [
    "filter_records",
    "Page",
    "clamp_page_index",
    "paginate",
    "Listing",
    "apply_query",
    "run_listing",
    "ListQuery",
    "sync_query_string",
    "SortSpec",
    "parse_sort",
    "sort_records",
    "classify_stock_level",
    "classify_stock_status",
]
