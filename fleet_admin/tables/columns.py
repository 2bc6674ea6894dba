"""
Column descriptors, sort state and comparison helpers shared by the tables.
"""

import unicodedata
from dataclasses import dataclass
from datetime import date, datetime
from functools import cmp_to_key
from typing import Any, Callable, Generic, List, Mapping, Optional, Sequence, TypeVar

from fleet_admin.core.enums import SortDirection
from fleet_admin.core.exceptions import ColumnResolutionError
from fleet_admin.schemas.table_schemas import SortStateView
from fleet_admin.utils.conversion import as_number, is_primitive, to_text

T = TypeVar("T")

_MISSING = object()


def resolve_field(record: Any, key: str) -> Any:
    """Look up ``key`` on a mapping or an object; ``_MISSING`` when absent."""
    if isinstance(record, Mapping):
        return record.get(key, _MISSING)
    return getattr(record, key, _MISSING)


@dataclass(frozen=True)
class ColumnDescriptor(Generic[T]):
    """
    A table column.

    ``key`` must resolve on the record unless ``render`` is given.
    ``search_text`` overrides the text matched by search, and ``sort_value``
    overrides the value compared when sorting.
    """
    key: str
    header: str
    render: Optional[Callable[[T], Any]] = None
    search_text: Optional[Callable[[T], str]] = None
    sort_value: Optional[Callable[[T], Any]] = None
    sortable: bool = False
    searchable: bool = True

    def raw(self, record: T) -> Any:
        value = resolve_field(record, self.key)
        if value is _MISSING:
            if self.render is None:
                raise ColumnResolutionError(self.key, record)
            return None
        return value

    def value(self, record: T) -> Any:
        if self.render is not None:
            return self.render(record)
        return self.raw(record)

    def text(self, record: T) -> str:
        """Display text of the cell."""
        return to_text(self.value(record))

    def searchable_text(self, record: T) -> str:
        if self.search_text is not None:
            return self.search_text(record)
        if self.render is not None:
            rendered = self.render(record)
            if is_primitive(rendered):
                return to_text(rendered)
        return to_text(self.raw(record))

    def sort_text(self, record: T) -> str:
        if self.sort_value is not None:
            return to_text(self.sort_value(record))
        return self.searchable_text(record)


@dataclass(frozen=True)
class MobileField(Generic[T]):
    """A label/value pair shown on the condensed card layout."""
    label: str
    render: Callable[[T], Any]


@dataclass(frozen=True)
class SortState:
    """At most one active sort key. ``direction`` is None when inactive."""
    key: Optional[str] = None
    direction: Optional[SortDirection] = None

    @property
    def is_active(self) -> bool:
        return self.key is not None and self.direction is not None

    def toggle(self, key: str) -> "SortState":
        """Advance the none -> asc -> desc -> none cycle for ``key``."""
        if self.key != key or self.direction is None:
            return SortState(key, SortDirection.ASC)
        if self.direction == SortDirection.ASC:
            return SortState(key, SortDirection.DESC)
        return SortState()

    def direction_for(self, key: str) -> Optional[SortDirection]:
        return self.direction if self.is_active and self.key == key else None

    def to_view(self) -> SortStateView:
        if not self.is_active:
            return SortStateView()
        return SortStateView(key=self.key, direction=self.direction)


def collation_key(text: str) -> str:
    """Case and accent insensitive comparison key."""
    decomposed = unicodedata.normalize("NFKD", text.casefold())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def _sign(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def compare_text(a: str, b: str) -> int:
    """Numeric when both sides read as finite numbers, collated text otherwise."""
    left, right = as_number(a), as_number(b)
    if left is not None and right is not None:
        return _sign(left, right)
    return _sign(collation_key(a), collation_key(b))


def compare_values(a: Any, b: Any) -> int:
    """Compare raw field values. Values of unrelated types compare equal."""
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        return _sign(a, b)
    if isinstance(a, str) and isinstance(b, str):
        return _sign(collation_key(a), collation_key(b))
    if isinstance(a, datetime) and isinstance(b, datetime):
        return _sign(a, b)
    if isinstance(a, date) and isinstance(b, date) and not isinstance(a, datetime) and not isinstance(b, datetime):
        return _sign(a, b)
    return 0


def sort_records(
    records: Sequence[T],
    state: SortState,
    extract: Callable[[T], Any],
    compare: Callable[[Any, Any], int],
) -> List[T]:
    """Stable sort of a copy of ``records``; the input order is kept when inactive."""
    if not state.is_active:
        return list(records)

    def _compare(a: T, b: T) -> int:
        return compare(extract(a), extract(b))

    return sorted(
        records,
        key=cmp_to_key(_compare),
        reverse=state.direction == SortDirection.DESC,
    )
