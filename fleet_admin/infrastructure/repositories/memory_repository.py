"""
In-memory record collection.

The repository is the authoritative store for one record type. Every
mutation swaps in a new list, so snapshots handed out by ``list()`` are never
modified afterwards.
"""

from typing import Callable, Generic, Iterable, List, Optional, TypeVar

from fleet_admin.core.exceptions import ConflictError, NotFoundError
from fleet_admin.domain.entities import BaseRecord

ModelType = TypeVar("ModelType", bound=BaseRecord)


class InMemoryRepository(Generic[ModelType]):
    """
    Base repository class with common CRUD operations.
    """

    def __init__(self, resource: str, items: Optional[Iterable[ModelType]] = None):
        self.resource = resource
        self._items: List[ModelType] = list(items or [])

    def __len__(self) -> int:
        return len(self._items)

    def list(self) -> List[ModelType]:
        return list(self._items)

    def get(self, record_id: str) -> Optional[ModelType]:
        for item in self._items:
            if item.id == record_id:
                return item
        return None

    def get_or_404(self, record_id: str) -> ModelType:
        item = self.get(record_id)
        if item is None:
            raise NotFoundError(self.resource, record_id)
        return item

    def exists(self, record_id: str) -> bool:
        return self.get(record_id) is not None

    def add(self, item: ModelType) -> ModelType:
        if self.exists(item.id):
            raise ConflictError(f"{self.resource} with ID '{item.id}' already exists", resource=self.resource)
        self._items = [*self._items, item]
        return item

    def add_many(self, items: Iterable[ModelType]) -> List[ModelType]:
        new_items = list(items)
        known = {item.id for item in self._items}
        for item in new_items:
            if item.id in known:
                raise ConflictError(f"{self.resource} with ID '{item.id}' already exists", resource=self.resource)
            known.add(item.id)
        self._items = [*self._items, *new_items]
        return new_items

    def update(self, item: ModelType) -> ModelType:
        """Replace the stored record carrying ``item.id``."""
        self.get_or_404(item.id)
        self._items = [item if existing.id == item.id else existing for existing in self._items]
        return item

    def delete(self, record_id: str) -> ModelType:
        item = self.get_or_404(record_id)
        self._items = [existing for existing in self._items if existing.id != record_id]
        return item

    def delete_where(self, predicate: Callable[[ModelType], bool]) -> int:
        """Delete every record matching ``predicate``; returns how many went."""
        kept = [item for item in self._items if not predicate(item)]
        removed = len(self._items) - len(kept)
        self._items = kept
        return removed
