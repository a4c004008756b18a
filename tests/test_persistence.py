from datetime import date
from pathlib import Path

from tenistas.models import Handedness, PlayerRecord
from tenistas.persistence import SQLitePlayerRepository


def _player(**overrides) -> PlayerRecord:
    data = {
        "name": "Novak Djokovic",
        "country": "Serbia",
        "weight": 77,
        "height": 188,
        "handedness": Handedness.RIGHT_HANDED,
        "points": 14000,
        "birth_date": date(1987, 5, 22),
    }
    data.update(overrides)
    return PlayerRecord(**data)


def _repo(tmp_path: Path) -> SQLitePlayerRepository:
    return SQLitePlayerRepository(tmp_path / "players.sqlite")


def test_create_assigns_id_and_timestamps(tmp_path: Path):
    repo = _repo(tmp_path)

    created = repo.create(_player())

    assert created is not None
    assert created.id > 0
    assert created.created_at is not None
    assert created.updated_at == created.created_at
    assert created.name == "Novak Djokovic"
    assert created.handedness is Handedness.RIGHT_HANDED
    assert created.birth_date == date(1987, 5, 22)


def test_get_missing_returns_none(tmp_path: Path):
    assert _repo(tmp_path).get(999) is None


def test_update_refreshes_updated_at_and_keeps_created_at(tmp_path: Path):
    repo = _repo(tmp_path)
    created = repo.create(_player())

    updated = repo.update(created.model_copy(update={"points": 15000}))

    assert updated is not None
    assert updated.points == 15000
    assert updated.created_at == created.created_at
    assert updated.updated_at >= created.updated_at


def test_update_missing_row_returns_none(tmp_path: Path):
    repo = _repo(tmp_path)

    assert repo.update(_player(id=42)) is None


def test_logical_delete_marks_row(tmp_path: Path):
    repo = _repo(tmp_path)
    created = repo.create(_player())

    deleted = repo.delete(created.id, logical=True)

    assert deleted is not None
    assert deleted.is_deleted is True
    assert repo.get(created.id).is_deleted is True


def test_physical_delete_removes_row(tmp_path: Path):
    repo = _repo(tmp_path)
    created = repo.create(_player())

    deleted = repo.delete(created.id, logical=False)

    assert deleted is not None
    assert deleted.id == created.id
    assert repo.get(created.id) is None


def test_delete_missing_returns_none(tmp_path: Path):
    assert _repo(tmp_path).delete(7) is None


def test_get_all_and_clear(tmp_path: Path):
    repo = _repo(tmp_path)
    repo.create(_player())
    repo.create(_player(name="Rafael Nadal", country="Spain"))

    names = [player.name for player in repo.get_all()]
    assert names == ["Novak Djokovic", "Rafael Nadal"]

    repo.clear()
    assert repo.get_all() == []


def test_schema_survives_reopen(tmp_path: Path):
    repo = _repo(tmp_path)
    created = repo.create(_player())

    reopened = _repo(tmp_path)

    assert reopened.get(created.id) == created
