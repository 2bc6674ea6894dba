import pytest

from fleet_admin.core.exceptions import ConflictError, NotFoundError
from fleet_admin.domain.entities import Part
from fleet_admin.infrastructure.repositories import InMemoryRepository


@pytest.fixture
def repository():
    return InMemoryRepository("Part", [
        Part(id="p1", name="Main Engine", ship_id="1"),
        Part(id="p2", name="Aircraft Radar", ship_id="2"),
    ])


def test_list_returns_snapshot(repository):
    snapshot = repository.list()
    repository.add(Part(id="p3", name="Anchor", ship_id="1"))
    assert [p.id for p in snapshot] == ["p1", "p2"]
    assert len(repository) == 3


def test_add_duplicate_id_conflicts(repository):
    with pytest.raises(ConflictError):
        repository.add(Part(id="p1", name="Again", ship_id="1"))


def test_update_and_delete(repository):
    updated = repository.get("p1").model_copy(update={"name": "Aux Engine"})
    repository.update(updated)
    assert repository.get("p1").name == "Aux Engine"

    repository.delete("p2")
    assert repository.get("p2") is None
    with pytest.raises(NotFoundError):
        repository.delete("p2")


def test_delete_where(repository):
    assert repository.delete_where(lambda part: part.ship_id == "1") == 1
    assert [p.id for p in repository.list()] == ["p2"]
