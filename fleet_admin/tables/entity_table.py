"""
Generic entity table.

Holds the interactive state of a list view (search term, sort state and a
pending delete) over a fixed snapshot of records and renders it into a
``TableView``. The table owns no persisted state; deleting is delegated to
the ``on_delete`` callback.
"""

from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, TypeVar

from fleet_admin.core.enums import SortDirection
from fleet_admin.core.exceptions import ValidationException
from fleet_admin.core.logging import get_logger
from fleet_admin.schemas.table_schemas import (
    CardFieldView,
    CardView,
    HeaderView,
    RowView,
    TableView,
)
from fleet_admin.utils.conversion import to_text

from .columns import ColumnDescriptor, MobileField, SortState, compare_text, resolve_field, sort_records
from .confirmation import DeleteConfirmation

logger = get_logger(__name__)

T = TypeVar("T")

SKELETON_ROWS = 5


def _record_id(record: Any) -> str:
    return str(resolve_field(record, "id"))


class EntityTable(Generic[T]):
    def __init__(
        self,
        data: Sequence[T],
        columns: Sequence[ColumnDescriptor[T]],
        mobile_fields: Sequence[MobileField[T]],
        get_entity_name: Callable[[T], str],
        on_delete: Callable[[str], Any],
        empty_message: str,
        entity_type_name: str,
        edit_base_path: str,
        loading: bool = False,
        search_placeholder: str = "Search...",
    ):
        self.data = list(data)
        self.columns = list(columns)
        self.mobile_fields = list(mobile_fields)
        self.get_entity_name = get_entity_name
        self.empty_message = empty_message
        self.entity_type_name = entity_type_name
        self.edit_base_path = edit_base_path
        self.loading = loading
        self.search_placeholder = search_placeholder

        self.search_term = ""
        self.sort = SortState()
        self.delete = DeleteConfirmation(on_delete, entity_type_name)

    def _column(self, key: str) -> Optional[ColumnDescriptor[T]]:
        for column in self.columns:
            if column.key == key:
                return column
        return None

    def _sortable_column(self, key: str) -> ColumnDescriptor[T]:
        column = self._column(key)
        if column is None or not column.sortable:
            raise ValidationException(
                f"Column '{key}' is not sortable",
                field="sort",
                value=key,
            )
        return column

    # Search

    def set_search(self, term: Optional[str]) -> None:
        if self.loading:
            return
        self.search_term = term or ""

    def filtered_rows(self) -> List[T]:
        """Rows matching the search term, in input order."""
        needle = self.search_term.lower()
        if not needle:
            return list(self.data)

        searchable = [column for column in self.columns if column.searchable]
        return [
            record for record in self.data
            if any(needle in column.searchable_text(record).lower() for column in searchable)
        ]

    # Sort

    def toggle_sort(self, key: str) -> SortState:
        if self.loading:
            return self.sort
        self._sortable_column(key)
        self.sort = self.sort.toggle(key)
        return self.sort

    def set_sort(self, key: Optional[str], direction: Optional[SortDirection] = SortDirection.ASC) -> SortState:
        """Jump straight to a sort state, as when restoring it from a query string."""
        if self.loading:
            return self.sort
        if key is None or direction is None:
            self.sort = SortState()
        else:
            self._sortable_column(key)
            self.sort = SortState(key, direction)
        return self.sort

    def visible_rows(self) -> List[T]:
        rows = self.filtered_rows()
        if not self.sort.is_active:
            return rows
        column = self._sortable_column(self.sort.key)
        return sort_records(rows, self.sort, column.sort_text, compare_text)

    # Delete

    def request_delete(self, record_id: str) -> None:
        if self.loading:
            return
        self.delete.request(record_id)

    def confirm_delete(self) -> Any:
        if self.loading:
            return None
        return self.delete.confirm()

    def cancel_delete(self) -> None:
        self.delete.cancel()

    @property
    def pending_delete_id(self) -> Optional[str]:
        return self.delete.pending_id

    # Rendering

    def _headers(self) -> List[HeaderView]:
        return [
            HeaderView(
                key=column.key,
                header=column.header,
                sortable=column.sortable,
                sort_direction=self.sort.direction_for(column.key),
            )
            for column in self.columns
        ]

    def _card(self, record: T) -> CardView:
        return CardView(
            id=_record_id(record),
            title=self.get_entity_name(record),
            fields=[
                CardFieldView(label=field.label, value=to_text(field.render(record)))
                for field in self.mobile_fields
            ],
        )

    def _skeleton(self) -> TableView:
        placeholder_cells: Dict[str, str] = {column.key: "" for column in self.columns}
        return TableView(
            entity_type=self.entity_type_name,
            headers=self._headers(),
            rows=[RowView(id=f"skeleton-{i}", cells=dict(placeholder_cells)) for i in range(SKELETON_ROWS)],
            cards=[
                CardView(
                    id=f"skeleton-{i}",
                    title="",
                    fields=[CardFieldView(label=field.label, value="") for field in self.mobile_fields],
                )
                for i in range(SKELETON_ROWS)
            ],
            total=len(self.data),
            search_placeholder=self.search_placeholder,
            loading=True,
            edit_base_path=self.edit_base_path,
        )

    def render(self) -> TableView:
        if self.loading:
            return self._skeleton()

        rows = self.visible_rows()
        return TableView(
            entity_type=self.entity_type_name,
            headers=self._headers(),
            rows=[
                RowView(id=_record_id(record), cells={column.key: column.text(record) for column in self.columns})
                for record in rows
            ],
            cards=[self._card(record) for record in rows],
            total=len(self.data),
            matched=len(rows),
            search_term=self.search_term,
            search_placeholder=self.search_placeholder,
            sort=self.sort.to_view(),
            empty_message=self.empty_message if not rows else None,
            delete_prompt=self.delete.prompt(),
            edit_base_path=self.edit_base_path,
        )
