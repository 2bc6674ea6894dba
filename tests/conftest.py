from io import BytesIO
from typing import Any, List, Optional, Sequence

import openpyxl
import pytest
from fastapi.testclient import TestClient

from fleet_admin.core.config import PersistenceSettings, Settings
from fleet_admin.infrastructure.persistence import SimulatedPersistGateway
from fleet_admin.main import create_application
from fleet_admin.services import build_services


@pytest.fixture
def settings() -> Settings:
    return Settings(
        SEED_DEMO_DATA=False,
        persistence=PersistenceSettings(delay_seconds=0, failure_rate=0),
    )


@pytest.fixture
def services(settings):
    return build_services(settings, SimulatedPersistGateway(delay_seconds=0, failure_rate=0))


@pytest.fixture
def client(settings):
    app = create_application(settings.model_copy(update={"SEED_DEMO_DATA": True}))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def empty_client(settings):
    app = create_application(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_workbook():
    """Build xlsx bytes from a header row and data rows."""

    def _make(
        headers: Sequence[Any],
        rows: Sequence[Sequence[Any]] = (),
        sheet_title: Optional[str] = None,
    ) -> bytes:
        workbook = openpyxl.Workbook()
        worksheet = workbook.active
        if sheet_title:
            worksheet.title = sheet_title
        worksheet.append(list(headers))
        for row in rows:
            worksheet.append(list(row))
        buffer = BytesIO()
        workbook.save(buffer)
        return buffer.getvalue()

    return _make


def read_workbook(content: bytes) -> List[List[Any]]:
    workbook = openpyxl.load_workbook(BytesIO(content))
    worksheet = workbook.worksheets[0]
    return [list(row) for row in worksheet.iter_rows(values_only=True)]


@pytest.fixture
def workbook_reader():
    return read_workbook
