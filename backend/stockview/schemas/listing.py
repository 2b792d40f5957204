"""Envelopes shared by every list view and mutation endpoint."""

from typing import Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel, Field

from stockview.listing.pipeline import Listing

T = TypeVar("T")


class ListingResponse(BaseModel, Generic[T]):
    """One page of a list view plus the state needed to render its controls."""
    items: list[T]
    total: int
    page: int = Field(..., description="One-based page number actually returned")
    size: int
    page_count: int
    has_previous: bool
    has_next: bool
    query: str = Field("", description="Canonical query string for this view state")

    @classmethod
    def from_listing(cls, listing: Listing) -> "ListingResponse[T]":
        page = listing.page
        return cls(
            items=page.items,
            total=page.total,
            page=page.page_index + 1,
            size=page.page_size,
            page_count=page.page_count,
            has_previous=page.has_previous,
            has_next=page.has_next,
            query=listing.query.to_query_string(),
        )


class MutationResponse(BaseModel, Generic[T]):
    message: str
    item: T | None = None


class BulkDeleteRequest(BaseModel):
    ids: list[UUID] = Field(..., min_length=1)


class BulkDeleteResponse(BaseModel):
    message: str
    deleted: int
