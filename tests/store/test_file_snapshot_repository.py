from __future__ import annotations

import json

from src.youth_attendance.youth_attendance.ingestion.parser import parse_groups
from src.youth_attendance.youth_attendance.store.file_snapshot_repository import JsonFileSnapshotRepository
from src.youth_attendance.youth_attendance.store.service import AttendanceStore


def test_missing_file_loads_nothing(tmp_path):
    repo = JsonFileSnapshotRepository(tmp_path / "state" / "snapshot.json")

    assert repo.load("k") is None
    assert repo.delete("k") is False


def test_save_load_delete(tmp_path):
    path = tmp_path / "state" / "snapshot.json"
    repo = JsonFileSnapshotRepository(path)

    repo.save("a", "one")
    repo.save("b", "two")
    repo.save("a", "three")

    assert repo.load("a") == "three"
    assert json.loads(path.read_text(encoding="utf-8")) == {"a": "three", "b": "two"}
    assert not path.with_suffix(".json.tmp").exists()

    assert repo.delete("a") is True
    assert repo.load("a") is None
    assert repo.load("b") == "two"


def test_save_replaces_corrupt_file(tmp_path):
    path = tmp_path / "snapshot.json"
    path.write_text("{truncated", encoding="utf-8")
    repo = JsonFileSnapshotRepository(path)

    repo.save("a", "one")

    assert json.loads(path.read_text(encoding="utf-8")) == {"a": "one"}
    assert repo.load("a") == "one"


def test_store_recovers_from_corrupt_file(tmp_path, sample_csv, groups):
    path = tmp_path / "snapshot.json"
    path.write_text("{truncated", encoding="utf-8")
    store = AttendanceStore(JsonFileSnapshotRepository(path), lambda: parse_groups(sample_csv))

    assert store.load() == groups
    store.add_group(leader_name="Zed")

    reloaded = AttendanceStore(JsonFileSnapshotRepository(path), lambda: ())
    assert [g.leader_name for g in reloaded.load()] == ["Zed", "Alice", "Dan"]
