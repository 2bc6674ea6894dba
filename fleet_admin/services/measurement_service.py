"""
Measurement row service.

One instance serves one row family (part rows or ship rows). Rows are kept
in a single repository and grouped by the parent reference field.
"""

from typing import Callable, List, Sequence

from pydantic import BaseModel

from fleet_admin.core.exceptions import NotFoundError
from fleet_admin.domain.entities import MeasurementRow, new_record_id, utcnow
from fleet_admin.infrastructure.repositories import InMemoryRepository
from fleet_admin.tables.definitions import MeasurementKind

from .base import BaseService


class MeasurementService(BaseService):
    def __init__(
        self,
        kind: MeasurementKind,
        repository: InMemoryRepository,
        parent_exists: Callable[[str], bool],
        parent_resource: str,
    ):
        super().__init__()
        self.kind = kind
        self.repository = repository
        self.parent_exists = parent_exists
        self.parent_resource = parent_resource

    def get_service_name(self) -> str:
        return f"{self.kind.name.title()}MeasurementService"

    def _parent_id(self, row: MeasurementRow) -> str:
        return getattr(row, self.kind.parent_field)

    def _check_parent(self, parent_id: str) -> None:
        if not self.parent_exists(parent_id):
            raise NotFoundError(self.parent_resource, parent_id)

    def _row(self, parent_id: str, row_id: str) -> MeasurementRow:
        self._check_parent(parent_id)
        row = self.repository.get(row_id)
        if row is None or self._parent_id(row) != parent_id:
            raise NotFoundError("Row", row_id)
        return row

    def _build_row(self, parent_id: str, values: BaseModel, prefix: str) -> MeasurementRow:
        return self.kind.row_model(
            id=new_record_id(prefix),
            created_at=utcnow(),
            **values.model_dump(),
            **{self.kind.parent_field: parent_id},
        )

    def rows_for(self, parent_id: str) -> List[MeasurementRow]:
        self._check_parent(parent_id)
        return [row for row in self.repository.list() if self._parent_id(row) == parent_id]

    def add_row(self, parent_id: str, values: BaseModel) -> MeasurementRow:
        self._check_parent(parent_id)
        row = self.repository.add(self._build_row(parent_id, values, "row"))
        self.log_operation("add_row", {"parent_id": parent_id, "row_id": row.id})
        return row

    def update_row(self, parent_id: str, row_id: str, values: BaseModel) -> MeasurementRow:
        row = self._row(parent_id, row_id)
        updated = row.model_copy(update=values.model_dump())
        self.repository.update(updated)
        self.log_operation("update_row", {"parent_id": parent_id, "row_id": row_id})
        return updated

    def delete_row(self, parent_id: str, row_id: str) -> MeasurementRow:
        self._row(parent_id, row_id)
        row = self.repository.delete(row_id)
        self.log_operation("delete_row", {"parent_id": parent_id, "row_id": row_id})
        return row

    def import_rows(self, parent_id: str, rows: Sequence[BaseModel]) -> List[MeasurementRow]:
        """Append a validated import batch in one step."""
        self._check_parent(parent_id)
        created = self.repository.add_many(
            self._build_row(parent_id, values, "imported") for values in rows
        )
        self.log_operation("import_rows", {"parent_id": parent_id, "imported": len(created)})
        return created

    def delete_for_parent(self, parent_id: str) -> int:
        removed = self.repository.delete_where(lambda row: self._parent_id(row) == parent_id)
        if removed:
            self.log_operation("delete_rows", {"parent_id": parent_id, "removed": removed})
        return removed
