"""Unit tests for backup and restore."""

import json

import pytest

from src.models import ProductionEvent
from src.repositories.local_repository import LocalJsonRepository
from src.services.backup_service import BACKUP_VERSION, BackupService
from src.services.errors import InvalidRecordError


@pytest.fixture
def repository(tmp_path):
    return LocalJsonRepository(tmp_path / "data")


class TestCreateBackup:
    def test_backup_contents(self, repository, tmp_path):
        path = BackupService(repository).create_backup(tmp_path / "out" / "backup.json")

        backup = json.loads(path.read_text(encoding="utf-8"))
        assert set(backup) == {"events", "staff", "users", "timestamp", "version"}
        assert backup["version"] == BACKUP_VERSION
        assert len(backup["events"]) == 2
        assert len(backup["staff"]) == 6
        assert backup["users"][0]["username"] == "administracion"
        assert backup["events"][0]["shifts"][0]["eventId"] == "ev-001"

    def test_only_backup_file_written(self, repository, tmp_path):
        BackupService(repository).create_backup(tmp_path / "out" / "backup.json")
        assert [p.name for p in (tmp_path / "out").iterdir()] == ["backup.json"]


class TestRestoreBackup:
    def test_round_trip_into_other_store(self, repository, tmp_path):
        path = BackupService(repository).create_backup(tmp_path / "backup.json")
        target = LocalJsonRepository(tmp_path / "other", use_seed_defaults=False)

        counts = BackupService(target).restore_backup(path)

        assert counts == {"events": 2, "staff": 6, "users": 1}
        assert [e.id for e in target.list_events()] == ["ev-001", "ev-002"]
        assert target.list_events() == repository.list_events()

    def test_restore_replaces_existing_data(self, repository, tmp_path):
        repository.save_event(ProductionEvent(id="extra", title="Extra", date="2024-01-01"))
        path = tmp_path / "backup.json"
        path.write_text(
            json.dumps({"events": [], "staff": [], "users": [], "version": "3.1"}),
            encoding="utf-8",
        )

        assert BackupService(repository).restore_backup(path) == {
            "events": 0,
            "staff": 0,
            "users": 0,
        }
        assert repository.list_events() == []

    def test_invalid_json(self, repository, tmp_path):
        path = tmp_path / "backup.json"
        path.write_text("{oops", encoding="utf-8")

        with pytest.raises(InvalidRecordError, match="not valid JSON"):
            BackupService(repository).restore_backup(path)

    def test_missing_collections(self, repository, tmp_path):
        path = tmp_path / "backup.json"
        path.write_text(json.dumps({"events": []}), encoding="utf-8")

        with pytest.raises(InvalidRecordError, match="events, staff and users"):
            BackupService(repository).restore_backup(path)

    def test_invalid_records(self, repository, tmp_path):
        path = tmp_path / "backup.json"
        path.write_text(
            json.dumps({"events": [], "staff": [], "users": [{"id": "u1", "username": ""}]}),
            encoding="utf-8",
        )

        with pytest.raises(InvalidRecordError, match="invalid records"):
            BackupService(repository).restore_backup(path)
        assert len(repository.list_events()) == 2
