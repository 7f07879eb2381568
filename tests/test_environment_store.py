"""
Tests for EnvironmentStore: empty first run, save/load, import replaces.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from api_desk.domains.models import EnvironmentState
from api_desk.errors import CorruptDocumentError, StorageIOError
from api_desk.infrastructure.storage.environment_store import EnvironmentStore
from api_desk.infrastructure.storage.paths import DataRoot
from tests.conftest import make_environment


@pytest.fixture
def store(data_root: DataRoot) -> EnvironmentStore:
    return EnvironmentStore(data_root)


def test_fresh_root_loads_empty_state(store: EnvironmentStore, data_dir: Path) -> None:
    state = store.load()

    assert state == EnvironmentState(environments=[], active_environment_id=None)
    assert not (data_dir / "environments.json").exists()


def test_save_then_load(store: EnvironmentStore, data_dir: Path) -> None:
    state = EnvironmentState(
        environments=[make_environment("dev", baseUrl="http://localhost:8000"), make_environment("prod")],
        active_environment_id="dev",
    )
    store.save(state)

    assert store.load() == state
    doc = json.loads((data_dir / "environments.json").read_text(encoding="utf-8"))
    assert doc["activeEnvironmentId"] == "dev"
    assert doc["environments"][0]["variables"][0] == {"key": "baseUrl", "value": "http://localhost:8000", "enabled": True}


def test_dangling_active_id_is_stored_as_given(store: EnvironmentStore) -> None:
    state = EnvironmentState(environments=[make_environment("dev")], active_environment_id="gone")
    store.save(state)

    loaded = store.load()
    assert loaded.active_environment_id == "gone"
    assert loaded.active_environment() is None


def test_corrupt_file_is_an_error(store: EnvironmentStore, data_dir: Path) -> None:
    data_dir.mkdir(parents=True)
    (data_dir / "environments.json").write_text("{", encoding="utf-8")

    with pytest.raises(CorruptDocumentError):
        store.load()


def test_import_replaces_without_merging(store: EnvironmentStore, tmp_path: Path) -> None:
    store.save(EnvironmentState(environments=[make_environment("old")], active_environment_id="old"))
    incoming = EnvironmentState(environments=[make_environment("new", token="t")], active_environment_id=None)
    source = tmp_path / "envs.json"
    source.write_text(json.dumps(incoming.to_dict()), encoding="utf-8")

    returned = store.import_from(source)

    assert returned == incoming
    assert store.load() == incoming
    assert [e.id for e in store.load().environments] == ["new"]


def test_import_bad_source_keeps_existing_state(store: EnvironmentStore, tmp_path: Path) -> None:
    existing = EnvironmentState(environments=[make_environment("keep")], active_environment_id="keep")
    store.save(existing)
    source = tmp_path / "bad.json"
    source.write_text('{"environments": [{"id": 1}]}', encoding="utf-8")

    with pytest.raises(CorruptDocumentError):
        store.import_from(source)
    with pytest.raises(StorageIOError):
        store.import_from(tmp_path / "missing.json")

    assert store.load() == existing


def test_export_writes_current_state(store: EnvironmentStore, tmp_path: Path) -> None:
    state = EnvironmentState(environments=[make_environment("dev", host="a")], active_environment_id="dev")
    store.save(state)
    target = tmp_path / "export.json"

    store.export(target)

    assert EnvironmentState.model_validate_json(target.read_text(encoding="utf-8")) == state


def test_export_on_fresh_root_writes_empty_state(store: EnvironmentStore, tmp_path: Path) -> None:
    target = tmp_path / "export.json"
    store.export(target)

    assert json.loads(target.read_text(encoding="utf-8")) == {"environments": [], "activeEnvironmentId": None}
