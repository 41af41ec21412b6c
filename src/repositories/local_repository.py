"""Document store backed by JSON files in a local directory."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from src.repositories import seed_data
from src.repositories.base import EVENTS, STAFF, USERS, DataRepository

logger = logging.getLogger(__name__)

_DEFAULTS: Dict[str, Callable[[], list]] = {
    EVENTS: seed_data.default_events,
    STAFF: seed_data.default_staff,
    USERS: seed_data.default_users,
}


class LocalJsonRepository(DataRepository):
    """
    Stores each collection as ``<data_dir>/<collection>.json``.

    A collection whose file does not exist yet reads as the first-run seed
    dataset. A file that cannot be parsed is logged and treated the same
    way, so the next write replaces it.

    Example:
        >>> repo = LocalJsonRepository("data")
        >>> [event.title for event in repo.list_events()]
        ['Gala de Premios Anual', 'Concierto Benéfico']
    """

    def __init__(self, data_dir: Union[str, Path], use_seed_defaults: bool = True):
        """
        Args:
            data_dir: Directory holding the collection files (created lazily)
            use_seed_defaults: Return the seed dataset for missing collections;
                when False missing collections are empty
        """
        self.data_dir = Path(data_dir)
        self.use_seed_defaults = use_seed_defaults

    def _collection_path(self, name: str) -> Path:
        return self.data_dir / f"{name}.json"

    def _read_file(self, path: Path) -> Optional[List[Dict[str, Any]]]:
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                documents = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.error(f"Could not read {path}: {e}")
            return None
        if not isinstance(documents, list):
            logger.error(f"Expected a list of documents in {path}")
            return None
        return [d for d in documents if isinstance(d, dict)]

    def _read_collection(self, name: str) -> List[Dict[str, Any]]:
        documents = self._read_file(self._collection_path(name))
        if documents is not None:
            return documents
        if not self.use_seed_defaults:
            return []
        logger.debug(f"No stored {name}; using seed dataset")
        return [record.to_document() for record in _DEFAULTS[name]()]

    def _write_collection(self, name: str, documents: List[Dict[str, Any]]) -> None:
        path = self._collection_path(name)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        # Write to a temp file in the same directory, then swap it in
        fd, temp_path = tempfile.mkstemp(
            dir=self.data_dir, prefix=f".{name}_", suffix=".json.tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(documents, f, ensure_ascii=False, indent=2)
            os.replace(temp_path, path)
        except Exception:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise

        logger.debug(f"Wrote {len(documents)} {name} documents to {path}")
