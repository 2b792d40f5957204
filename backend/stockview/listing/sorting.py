"""Sorting of list rows by a ``field-direction`` key such as ``quantity-desc``."""

import unicodedata
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Sequence

from stockview.listing.views import ViewDefinition

ASC = "asc"
DESC = "desc"
DIRECTIONS = (ASC, DESC)


@dataclass(frozen=True)
class SortSpec:
    field: str
    direction: str = ASC

    @property
    def descending(self) -> bool:
        return self.direction == DESC

    def encode(self) -> str:
        return f"{self.field}-{self.direction}"


def parse_sort(value: str | None, view: ViewDefinition) -> SortSpec:
    """Parse ``"min-stock-desc"`` style values; anything unknown gives the view default."""
    default = _split(view.default_sort)
    if not value:
        return default
    spec = _split(value)
    if spec is None or spec.field not in view.sort_fields:
        return default
    return spec


def _split(value: str) -> SortSpec | None:
    # Field names can contain dashes, the direction is always the last part
    field, sep, direction = value.strip().rpartition("-")
    if not sep or not field or direction not in DIRECTIONS:
        return None
    return SortSpec(field, direction)


def locale_key(value: str) -> tuple[str, str]:
    """Case and accent insensitive ordering; the raw value breaks ties."""
    normalized = unicodedata.normalize("NFKD", value)
    stripped = "".join(ch for ch in normalized if not unicodedata.combining(ch))
    return stripped.casefold(), value


def as_utc(value: datetime) -> datetime:
    """Naive timestamps are stored in UTC."""
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def sort_key(value: Any) -> Any:
    if isinstance(value, str):
        return locale_key(value)
    if isinstance(value, datetime):
        return as_utc(value).timestamp()
    if isinstance(value, date):
        return value.toordinal()
    if isinstance(value, (bool, int, float, Decimal)):
        return value
    return locale_key(str(value))


def sort_records(records: Sequence[Any], view: ViewDefinition, spec: SortSpec) -> list[Any]:
    """Return a new, stably sorted list.

    Rows whose sort value is ``None`` are placed last in either direction and
    keep their relative order.
    """
    if spec.field not in view.sort_fields:
        spec = parse_sort(None, view)
    accessor = view.sort_fields[spec.field].accessor
    present = []
    missing = []
    for record in records:
        value = accessor(record)
        if value is None:
            missing.append(record)
        else:
            present.append((sort_key(value), record))
    # sorted() keeps equal elements in input order, reverse=True included
    present.sort(key=lambda pair: pair[0], reverse=spec.descending)
    return [record for _, record in present] + missing
