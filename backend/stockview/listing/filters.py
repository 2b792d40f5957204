"""Record filtering: free-text search, categorical and date-range filters."""

from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, Mapping

from stockview.listing.sorting import as_utc
from stockview.listing.views import ALL, DATE_RANGE, FilterField, ViewDefinition


def date_range_start(bucket: str, now: datetime) -> datetime | None:
    """Start boundary of a date bucket relative to ``now``.

    Weeks start on Sunday; quarters are calendar quarters.
    """
    today = as_utc(now).replace(hour=0, minute=0, second=0, microsecond=0)
    if bucket == "today":
        return today
    if bucket == "week":
        # Monday is 0 in Python, Sunday 6
        return today - timedelta(days=(today.weekday() + 1) % 7)
    if bucket == "month":
        return today.replace(day=1)
    if bucket == "quarter":
        return today.replace(month=(today.month - 1) // 3 * 3 + 1, day=1)
    return None


def matches_search(record: Any, view: ViewDefinition, search: str) -> bool:
    term = search.strip().lower()
    if not term:
        return True
    for accessor in view.search_fields:
        value = accessor(record)
        if value is not None and term in str(value).lower():
            return True
    return False


def matches_filter(record: Any, spec: FilterField, value: str, now: datetime) -> bool:
    if not value or value == ALL:
        return True
    field_value = spec.accessor(record)
    if spec.kind == DATE_RANGE:
        start = date_range_start(value, now)
        if start is None:
            return True
        return field_value is not None and as_utc(field_value) >= start
    if field_value is None:
        return False
    return str(field_value) == value


def filter_records(
    records: Iterable[Any],
    view: ViewDefinition,
    search: str = "",
    filters: Mapping[str, str] | None = None,
    now: datetime | None = None,
) -> list[Any]:
    """Return the records matching the search term and every active filter.

    Filters combine with AND; a filter set to ``"all"`` (or missing) does not
    constrain its field. The input is not modified.
    """
    filters = filters or {}
    now = now or datetime.now(timezone.utc)
    active = [
        (view.get_filter(param), value)
        for param, value in filters.items()
        if param in view.filter_params and value and value != ALL
    ]
    return [
        record
        for record in records
        if matches_search(record, view, search)
        and all(matches_filter(record, spec, value, now) for spec, value in active)
    ]
