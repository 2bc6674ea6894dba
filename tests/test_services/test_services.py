"""Tests for entity and measurement services."""

from datetime import date

import pytest

from fleet_admin.core.enums import Department, ShipStatus, UserRole, UserStatus
from fleet_admin.core.exceptions import NotFoundError, PersistenceError, ServiceError, ValidationException
from fleet_admin.domain.entities import PartRowValues
from fleet_admin.infrastructure.persistence import PersistGateway
from fleet_admin.schemas.part_schemas import PartCreate, PartUpdate
from fleet_admin.schemas.ship_schemas import ShipCreate, ShipUpdate
from fleet_admin.schemas.user_schemas import UserCreate, UserImportRow, UserUpdate
from fleet_admin.services import build_services


class RecordingGateway(PersistGateway):
    def __init__(self, fail=False, error=None):
        self.fail = fail
        self.error = error
        self.calls = []

    async def persist(self, operation, payload=None):
        self.calls.append((operation, payload))
        if self.error is not None:
            raise self.error
        if self.fail:
            raise PersistenceError(operation=operation)


@pytest.fixture
def gateway():
    return RecordingGateway()


@pytest.fixture
def container(settings, gateway):
    return build_services(settings, gateway)


def _ship_data(**overrides):
    data = {"name": "Queen Mary 2", "type": "Cruise Ship", "length": 345, "width": 45, "height": 72}
    data.update(overrides)
    return ShipCreate(**data)


def _values(first=1.0):
    return PartRowValues(value1=first, value2=2, value3=3, value4=4, value5=5, value6=6, value7=7)


async def test_create_ship_defaults(container, gateway):
    ship = await container.ships.create_ship(_ship_data(year_built=2004))
    assert ship.status == ShipStatus.ACTIVE
    assert ship.description == ""
    assert container.ships.get_ship(ship.id) == ship
    assert gateway.calls[0][0] == "create_ship"


async def test_failed_persist_leaves_state_untouched(settings):
    container = build_services(settings, RecordingGateway(fail=True))
    with pytest.raises(PersistenceError):
        await container.ships.create_ship(_ship_data())
    assert container.ships.list_ships() == []


async def test_unexpected_gateway_error_becomes_service_error(settings):
    container = build_services(settings, RecordingGateway(error=ConnectionResetError("peer gone")))
    with pytest.raises(ServiceError) as exc_info:
        await container.ships.create_ship(_ship_data())
    assert "create_ship" in exc_info.value.message
    assert isinstance(exc_info.value.__cause__, ConnectionResetError)
    assert container.ships.list_ships() == []


async def test_update_ship_requires_existing(container):
    update = ShipUpdate(name="X", type="Y", length=1, width=1, height=1, status=ShipStatus.UNDER_REPAIR)
    with pytest.raises(NotFoundError):
        await container.ships.update_ship("missing", update)

    ship = await container.ships.create_ship(_ship_data())
    updated = await container.ships.update_ship(ship.id, update)
    assert updated.status == ShipStatus.UNDER_REPAIR
    assert updated.created_at == ship.created_at


async def test_part_requires_existing_ship(container):
    with pytest.raises(ValidationException):
        await container.parts.create_part(PartCreate(name="Anchor", ship_id="nope"))


async def test_update_part_sends_rows_with_part(container, gateway):
    ship = await container.ships.create_ship(_ship_data())
    part = await container.parts.create_part(PartCreate(name="Anchor", ship_id=ship.id))
    container.part_rows.add_row(part.id, _values(9.5))

    await container.parts.update_part(part.id, PartUpdate(name="Bow Anchor", ship_id=ship.id))

    operation, payload = gateway.calls[-1]
    assert operation == "update_part"
    assert payload["name"] == "Bow Anchor"
    assert [row["value1"] for row in payload["rows"]] == [9.5]


async def test_failed_part_update_can_be_resubmitted(settings):
    gateway = RecordingGateway()
    container = build_services(settings, gateway)
    ship = await container.ships.create_ship(_ship_data())
    part = await container.parts.create_part(PartCreate(name="Anchor", ship_id=ship.id))

    gateway.fail = True
    with pytest.raises(PersistenceError):
        await container.parts.update_part(part.id, PartUpdate(name="Renamed", ship_id=ship.id))
    assert container.parts.get_part(part.id).name == "Anchor"

    gateway.fail = False
    await container.parts.update_part(part.id, PartUpdate(name="Renamed", ship_id=ship.id))
    assert container.parts.get_part(part.id).name == "Renamed"


async def test_deleting_parent_drops_its_rows(container):
    ship = await container.ships.create_ship(_ship_data())
    part = await container.parts.create_part(PartCreate(name="Anchor", ship_id=ship.id))
    container.part_rows.add_row(part.id, _values())
    container.part_rows.add_row(part.id, _values())

    await container.parts.delete_part(part.id)

    assert len(container.part_rows.repository) == 0
    with pytest.raises(NotFoundError):
        container.part_rows.rows_for(part.id)


async def test_user_lifecycle(container):
    user = await container.users.create_user(UserCreate(
        name="Alice Johnson", email="alice@example.com", role=UserRole.ADMIN, department=Department.ENGINEERING,
    ))
    assert user.status == UserStatus.ACTIVE
    assert user.join_date == date.today()

    updated = await container.users.update_user(user.id, UserUpdate(status=UserStatus.INACTIVE))
    assert updated.status == UserStatus.INACTIVE
    assert updated.name == "Alice Johnson"

    await container.users.delete_user(user.id)
    assert container.users.list_users() == []


async def test_import_users(container):
    rows = [UserImportRow(name="Carol", email="carol@example.com"), UserImportRow(name="Dan", email="dan@example.com")]
    created = await container.users.import_users(rows)
    assert [u.name for u in created] == ["Carol", "Dan"]
    assert all(u.id.startswith("imported-") for u in created)


async def test_measurement_rows_are_scoped_to_parent(container):
    ship = await container.ships.create_ship(_ship_data())
    first = await container.parts.create_part(PartCreate(name="A", ship_id=ship.id))
    second = await container.parts.create_part(PartCreate(name="B", ship_id=ship.id))

    row = container.part_rows.add_row(first.id, _values())
    assert row.id.startswith("row-")
    assert row.part_id == first.id

    with pytest.raises(NotFoundError):
        container.part_rows.update_row(second.id, row.id, _values(2))

    updated = container.part_rows.update_row(first.id, row.id, _values(2))
    assert updated.value1 == 2.0
    assert updated.created_at == row.created_at

    imported = container.part_rows.import_rows(second.id, [_values(3), _values(4)])
    assert [r.value1 for r in container.part_rows.rows_for(second.id)] == [3.0, 4.0]
    assert all(r.id.startswith("imported-") for r in imported)

    container.part_rows.delete_row(first.id, row.id)
    assert container.part_rows.rows_for(first.id) == []


def test_rows_for_unknown_parent(container):
    with pytest.raises(NotFoundError):
        container.ship_rows.rows_for("missing")
