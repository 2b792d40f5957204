"""Helpers shared by the list endpoints."""

from typing import Sequence

from fastapi import HTTPException, Request, Response, status
from starlette.datastructures import QueryParams

from stockview.core.config import settings
from stockview.listing.pipeline import run_listing
from stockview.listing.query_state import ListQuery, sync_query_string
from stockview.listing.views import ViewDefinition
from stockview.schemas.listing import ListingResponse
from stockview.services.collections import CollectionState


def get_query_params(request: Request) -> QueryParams:
    return request.query_params


def require_data(state: CollectionState) -> list:
    """Records of a fetched collection, or 503 when the load failed."""
    if state.error is not None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Could not load records, try again later",
        )
    return state.data


def render_listing(
    rows: Sequence,
    view: ViewDefinition,
    params: QueryParams,
    response: Response,
) -> ListingResponse:
    """Run the listing pipeline for the request's query string.

    When the incoming query string is not the canonical one (defaults spelled
    out, unknown values, a page past the end), the canonical query is sent in
    ``Content-Location`` so the client can replace its URL.
    """
    query = ListQuery.from_params(
        view,
        params,
        page_size_options=settings.PAGE_SIZE_OPTIONS,
        default_size=settings.DEFAULT_PAGE_SIZE,
    )
    listing = run_listing(rows, query)
    canonical = sync_query_string(str(params), listing.query)
    if canonical is not None:
        response.headers["Content-Location"] = f"?{canonical}" if canonical else "?"
    return ListingResponse.from_listing(listing)
