from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from fleet_admin.core.enums import SortDirection


class SortStateView(BaseModel):
    key: Optional[str] = None
    direction: Optional[SortDirection] = None


class HeaderView(BaseModel):
    key: str
    header: str
    sortable: bool = False
    sort_direction: Optional[SortDirection] = None


class RowView(BaseModel):
    id: str
    cells: Dict[str, str]


class CardFieldView(BaseModel):
    label: str
    value: str


class CardView(BaseModel):
    """Condensed card layout used on narrow screens."""
    id: str
    title: str
    fields: List[CardFieldView]


class DeletePromptView(BaseModel):
    record_id: str
    title: str = "Are you sure?"
    message: str
    confirm_label: str


class TableView(BaseModel):
    """Rendered state of an entity table."""
    entity_type: str
    headers: List[HeaderView]
    rows: List[RowView] = Field(default_factory=list)
    cards: List[CardView] = Field(default_factory=list)
    total: int = 0
    matched: int = 0
    search_term: str = ""
    search_placeholder: str = "Search..."
    sort: SortStateView = Field(default_factory=SortStateView)
    empty_message: Optional[str] = None
    loading: bool = False
    delete_prompt: Optional[DeletePromptView] = None
    edit_base_path: Optional[str] = None


class MeasurementColumnView(BaseModel):
    key: str
    label: str
    sort_direction: Optional[SortDirection] = None


class MeasurementRowView(BaseModel):
    id: str
    created_at: datetime
    values: Dict[str, float]
    display: Dict[str, str]
    editing: bool = False


class MeasurementTableView(BaseModel):
    """Rendered state of a measurement table."""
    title: str
    description: str
    row_count: int
    columns: List[MeasurementColumnView]
    id_sort_direction: Optional[SortDirection] = None
    rows: List[MeasurementRowView] = Field(default_factory=list)
    sort: SortStateView = Field(default_factory=SortStateView)
    editing_id: Optional[str] = None
    edit_values: Optional[Dict[str, float]] = None
    add_form_open: bool = False
    new_row: Dict[str, float] = Field(default_factory=dict)
    importing: bool = False
    import_error: Optional[str] = None
    delete_prompt: Optional[DeletePromptView] = None
    export_filename: str
