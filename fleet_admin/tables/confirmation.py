from typing import Any, Callable, Optional

from fleet_admin.core.logging import get_logger
from fleet_admin.schemas.table_schemas import DeletePromptView

logger = get_logger(__name__)


class DeleteConfirmation:
    """
    Two-step delete: a request stages the id, only a confirmation deletes.

    At most one id is pending; a newer request replaces the older one.
    """

    def __init__(self, on_delete: Callable[[str], Any], entity_type_name: str):
        self.on_delete = on_delete
        self.entity_type_name = entity_type_name
        self.pending_id: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.pending_id is not None

    def request(self, record_id: str) -> None:
        if self.pending_id is not None and self.pending_id != record_id:
            logger.debug(f"Replacing pending delete {self.pending_id} with {record_id}")
        self.pending_id = record_id

    def confirm(self) -> Any:
        """Invoke the delete callback for the pending id and return its result."""
        if self.pending_id is None:
            return None
        record_id = self.pending_id
        self.pending_id = None
        logger.info(f"Deleting {self.entity_type_name.lower()} {record_id}")
        return self.on_delete(record_id)

    def cancel(self) -> None:
        self.pending_id = None

    def prompt(self) -> Optional[DeletePromptView]:
        if self.pending_id is None:
            return None
        entity = self.entity_type_name.lower()
        return DeletePromptView(
            record_id=self.pending_id,
            message=(
                f"This action cannot be undone. This will permanently delete the {entity} "
                f"and remove its data from the system."
            ),
            confirm_label=f"Delete {self.entity_type_name.title()}",
        )
