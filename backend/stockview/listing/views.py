"""List view definitions.

A view describes, for one kind of row, which fields the search box looks at,
which filter parameters exist and what they compare against, and which sort
keys are offered. The listing pipeline is written once against these
definitions instead of once per view.
"""

from dataclasses import dataclass, field
from operator import attrgetter
from typing import Any, Callable

from stockview.listing.status import STOCK_LEVELS, STOCK_STATUSES

ALL = "all"

EXACT = "exact"
DATE_RANGE = "date"

DATE_RANGES = ("today", "week", "month", "quarter")
ALERT_STATUSES = ("active", "resolved", "dismissed")
ALERT_SEVERITIES = ("low", "medium", "high")
STOCK_TRANSFER_STATUSES = ("draft", "in-progress", "completed", "cancelled")
WAREHOUSE_TRANSFER_STATUSES = ("draft", "pending", "in-transit", "completed", "cancelled")
WAREHOUSE_STATUSES = ("active", "inactive", "maintenance")
LOCATION_TYPES = ("zone", "aisle", "section", "shelf", "bin")
LOCATION_STATUSES = ("active", "inactive", "maintenance", "reserved")

Accessor = Callable[[Any], Any]


@dataclass(frozen=True)
class FilterField:
    """A filter parameter.

    ``options`` lists the accepted values. ``None`` marks an open-ended filter
    (locations, categories) that takes any value and compares it as a string.
    """

    param: str
    accessor: Accessor
    options: tuple[str, ...] | None = None
    kind: str = EXACT


@dataclass(frozen=True)
class SortField:
    name: str
    accessor: Accessor


@dataclass(frozen=True)
class ViewDefinition:
    name: str
    search_fields: tuple[Accessor, ...]
    filters: tuple[FilterField, ...]
    sorts: tuple[SortField, ...]
    default_sort: str
    sort_fields: dict[str, SortField] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "sort_fields", {s.name: s for s in self.sorts})

    @property
    def filter_params(self) -> tuple[str, ...]:
        return tuple(f.param for f in self.filters)

    def get_filter(self, param: str) -> FilterField:
        for f in self.filters:
            if f.param == param:
                return f
        raise KeyError(param)


STOCK_LEVELS_VIEW = ViewDefinition(
    name="stock-levels",
    search_fields=(attrgetter("product_name"), attrgetter("sku")),
    filters=(
        FilterField("status", attrgetter("status"), STOCK_STATUSES),
        FilterField("location", attrgetter("location_id")),
        FilterField("level", attrgetter("level"), STOCK_LEVELS),
        FilterField("category", attrgetter("category")),
    ),
    sorts=(
        SortField("name", attrgetter("product_name")),
        SortField("quantity", attrgetter("quantity")),
        SortField("min-stock", attrgetter("min_level")),
        SortField("max-stock", attrgetter("max_level")),
    ),
    default_sort="name-asc",
)

STOCK_ALERTS_VIEW = ViewDefinition(
    name="stock-alerts",
    search_fields=(
        attrgetter("product_name"),
        attrgetter("sku"),
        attrgetter("location_name"),
    ),
    filters=(
        FilterField("status", attrgetter("status"), ALERT_STATUSES),
        FilterField("severity", attrgetter("severity"), ALERT_SEVERITIES),
        FilterField("location", attrgetter("location_id")),
    ),
    sorts=(
        SortField("date", attrgetter("created_at")),
        SortField("name", attrgetter("product_name")),
        SortField("quantity", attrgetter("current_quantity")),
    ),
    default_sort="date-desc",
)

STOCK_TRANSFERS_VIEW = ViewDefinition(
    name="stock-transfers",
    search_fields=(
        attrgetter("transfer_number"),
        attrgetter("source_location_name"),
        attrgetter("destination_location_name"),
        attrgetter("requested_by"),
    ),
    filters=(
        FilterField("status", attrgetter("status"), STOCK_TRANSFER_STATUSES),
        FilterField("source", attrgetter("source_location_id")),
        FilterField("destination", attrgetter("destination_location_id")),
        FilterField("date", attrgetter("requested_at"), DATE_RANGES, DATE_RANGE),
    ),
    sorts=(
        SortField("date", attrgetter("requested_at")),
        SortField("number", attrgetter("transfer_number")),
        SortField("source", attrgetter("source_location_name")),
        SortField("destination", attrgetter("destination_location_name")),
    ),
    default_sort="date-desc",
)

WAREHOUSE_TRANSFERS_VIEW = ViewDefinition(
    name="warehouse-transfers",
    search_fields=(
        attrgetter("id"),
        attrgetter("tracking_number"),
        attrgetter("source_warehouse_name"),
        attrgetter("destination_warehouse_name"),
    ),
    filters=(
        FilterField("status", attrgetter("status"), WAREHOUSE_TRANSFER_STATUSES),
        FilterField("source", attrgetter("source_warehouse_id")),
        FilterField("destination", attrgetter("destination_warehouse_id")),
        FilterField("date", attrgetter("initiated_at"), DATE_RANGES, DATE_RANGE),
    ),
    sorts=(
        SortField("id", attrgetter("id")),
        SortField("date", attrgetter("initiated_at")),
        SortField("arrival", attrgetter("estimated_arrival")),
        SortField("items", attrgetter("item_count")),
        SortField("status", attrgetter("status")),
    ),
    default_sort="date-desc",
)

WAREHOUSE_INVENTORY_VIEW = ViewDefinition(
    name="warehouse-inventory",
    search_fields=(attrgetter("product_name"), attrgetter("sku")),
    filters=(
        FilterField("category", attrgetter("category")),
        FilterField("location", attrgetter("location_id")),
        FilterField("status", attrgetter("status"), STOCK_STATUSES),
    ),
    sorts=(
        SortField("name", attrgetter("product_name")),
        SortField("quantity", attrgetter("quantity")),
        SortField("category", attrgetter("category")),
    ),
    default_sort="name-asc",
)

# A warehouse's "location" is its city
WAREHOUSES_VIEW = ViewDefinition(
    name="warehouses",
    search_fields=(attrgetter("name"), attrgetter("code"), attrgetter("city")),
    filters=(
        FilterField("status", attrgetter("status"), WAREHOUSE_STATUSES),
        FilterField("location", attrgetter("city")),
    ),
    sorts=(
        SortField("name", attrgetter("name")),
        SortField("capacity", attrgetter("capacity")),
        SortField("utilization", attrgetter("utilization")),
    ),
    default_sort="name-asc",
)

WAREHOUSE_LOCATIONS_VIEW = ViewDefinition(
    name="warehouse-locations",
    search_fields=(attrgetter("name"), attrgetter("code")),
    filters=(
        FilterField("type", attrgetter("type"), LOCATION_TYPES),
        FilterField("status", attrgetter("status"), LOCATION_STATUSES),
    ),
    sorts=(
        SortField("name", attrgetter("name")),
        SortField("capacity", attrgetter("capacity")),
        SortField("utilization", attrgetter("utilization")),
    ),
    default_sort="name-asc",
)
