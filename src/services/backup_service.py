"""Full-dataset backup and restore as a single JSON file."""

import json
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Union

from pydantic import ValidationError

from src.models import AppUser, ProductionEvent, StaffMember
from src.repositories.base import DataRepository
from src.services.errors import InvalidRecordError

logger = logging.getLogger(__name__)

BACKUP_VERSION = "3.1"


class BackupService:
    """
    Snapshot of every collection in a repository.

    The backup file is a JSON object with ``events``, ``staff``, ``users``,
    ``timestamp`` (ISO 8601) and ``version`` keys.
    """

    def __init__(self, repository: DataRepository):
        self.repository = repository

    def build_backup(self) -> Dict[str, Any]:
        return {
            "events": [event.to_document() for event in self.repository.list_events()],
            "staff": [member.to_document() for member in self.repository.list_staff()],
            "users": [user.to_document() for user in self.repository.list_users()],
            "timestamp": datetime.now().isoformat(),
            "version": BACKUP_VERSION,
        }

    def create_backup(self, path: Union[str, Path]) -> Path:
        """
        Write a backup file, replacing ``path`` atomically.

        Returns:
            The path written
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        backup = self.build_backup()

        fd, temp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(backup, f, ensure_ascii=False, indent=2)
            os.replace(temp_path, path)
        except Exception:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise

        logger.info(
            f"Backup written to {path}: {len(backup['events'])} events, "
            f"{len(backup['staff'])} staff, {len(backup['users'])} users"
        )
        return path

    def restore_backup(self, path: Union[str, Path]) -> Dict[str, int]:
        """
        Replace the repository contents with a backup file.

        Returns:
            Number of restored records per collection

        Raises:
            InvalidRecordError: If the file is not a valid backup
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                backup = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidRecordError(f"Backup file is not valid JSON: {e}") from e

        if not isinstance(backup, dict) or not all(
            isinstance(backup.get(key), list) for key in ("events", "staff", "users")
        ):
            raise InvalidRecordError("Backup file must contain events, staff and users lists")

        try:
            events = [ProductionEvent.model_validate(d) for d in backup["events"]]
            staff = [StaffMember.model_validate(d) for d in backup["staff"]]
            users = [AppUser.model_validate(d) for d in backup["users"]]
        except ValidationError as e:
            raise InvalidRecordError(f"Backup contains invalid records: {e}") from e

        self.repository.seed(events, staff, users)
        counts = {"events": len(events), "staff": len(staff), "users": len(users)}
        logger.info(f"Restored backup {path} (version {backup.get('version', '?')}): {counts}")
        return counts
