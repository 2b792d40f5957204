"""List view state carried in the URL query string.

``ListQuery`` is read from the request's query parameters, every value
defaulted when absent or not recognised, and written back with only the
non-default values so that URLs stay short and canonical.
"""

from dataclasses import dataclass, field, replace
from typing import Mapping
from urllib.parse import parse_qsl, urlencode

from stockview.core.config import settings
from stockview.listing.sorting import SortSpec, parse_sort
from stockview.listing.views import ALL, ViewDefinition

SEARCH_PARAM = "search"
SORT_PARAM = "sort"
PAGE_PARAM = "page"
SIZE_PARAM = "size"


@dataclass(frozen=True)
class ListQuery:
    view: ViewDefinition = field(repr=False, compare=False)
    search: str = ""
    filters: dict[str, str] = field(default_factory=dict)
    sort: SortSpec | None = None
    page: int = 1
    size: int = settings.DEFAULT_PAGE_SIZE
    default_size: int = field(default=settings.DEFAULT_PAGE_SIZE, repr=False, compare=False)

    def __post_init__(self):
        filters = {param: self.filters.get(param, ALL) or ALL for param in self.view.filter_params}
        object.__setattr__(self, "filters", filters)
        if self.sort is None:
            object.__setattr__(self, "sort", parse_sort(None, self.view))

    @property
    def page_index(self) -> int:
        return self.page - 1

    @classmethod
    def from_params(
        cls,
        view: ViewDefinition,
        params: Mapping[str, str],
        page_size_options: list[int] | None = None,
        default_size: int | None = None,
    ) -> "ListQuery":
        """Read the view state from query parameters.

        Fixed-option filters fall back to ``all`` for a value they do not
        offer. Open-ended filters (locations, categories) take any non-empty
        value as given, so an unknown one simply matches nothing. Nothing
        raises.
        """
        page_size_options = page_size_options or settings.PAGE_SIZE_OPTIONS
        default_size = default_size or settings.DEFAULT_PAGE_SIZE

        filters = {}
        for spec in view.filters:
            value = (params.get(spec.param) or ALL).strip()
            if spec.options is not None and value not in spec.options:
                value = ALL
            filters[spec.param] = value

        return cls(
            view=view,
            search=params.get(SEARCH_PARAM) or "",
            filters=filters,
            sort=parse_sort(params.get(SORT_PARAM), view),
            page=_positive_int(params.get(PAGE_PARAM), 1),
            size=_choice_int(params.get(SIZE_PARAM), page_size_options, default_size),
            default_size=default_size,
        )

    def with_changes(self, **changes) -> "ListQuery":
        """Return the state after a user edit.

        Anything other than a page change sends the user back to the first
        page, so a new filter or page size never lands on an empty page.
        """
        if "filters" in changes:
            changes["filters"] = {**self.filters, **changes["filters"]}
        if "page" not in changes:
            changes["page"] = 1
        return replace(self, **changes)

    def with_page(self, page: int) -> "ListQuery":
        return replace(self, page=page)

    def reset(self) -> "ListQuery":
        return ListQuery(view=self.view, size=self.default_size, default_size=self.default_size)

    def to_params(self) -> dict[str, str]:
        """Non-default values only, in the view's parameter order."""
        params = {}
        if self.search:
            params[SEARCH_PARAM] = self.search
        for param in self.view.filter_params:
            value = self.filters.get(param, ALL)
            if value != ALL:
                params[param] = value
        sort = self.sort.encode()
        if sort != self.view.default_sort:
            params[SORT_PARAM] = sort
        if self.page != 1:
            params[PAGE_PARAM] = str(self.page)
        if self.size != self.default_size:
            params[SIZE_PARAM] = str(self.size)
        return params

    def to_query_string(self) -> str:
        return urlencode(self.to_params())

    def managed_params(self) -> tuple[str, ...]:
        return (SEARCH_PARAM, *self.view.filter_params, SORT_PARAM, PAGE_PARAM, SIZE_PARAM)


def sync_query_string(current: str, query: ListQuery) -> str | None:
    """Merge ``query`` into the current query string.

    Parameters the view does not manage are kept as they are. Returns the new
    query string, or ``None`` when it is identical to ``current`` so the
    caller does not navigate for nothing.
    """
    managed = set(query.managed_params())
    wanted = query.to_params()
    pairs = []
    placed = set()
    # Values already in the URL keep their position, like URLSearchParams.set()
    for key, value in parse_qsl(current, keep_blank_values=True):
        if key not in managed:
            pairs.append((key, value))
        elif key in wanted and key not in placed:
            pairs.append((key, wanted[key]))
            placed.add(key)
    pairs.extend((key, value) for key, value in wanted.items() if key not in placed)
    updated = urlencode(pairs)
    if updated == current:
        return None
    return updated


def _positive_int(value: str | None, default: int) -> int:
    try:
        number = int(value) if value is not None else default
    except ValueError:
        return default
    return number if number >= 1 else default


def _choice_int(value: str | None, options: list[int], default: int) -> int:
    try:
        number = int(value) if value is not None else default
    except ValueError:
        return default
    return number if number in options else default
