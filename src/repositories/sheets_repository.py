"""Document store backed by a shared Google Sheets spreadsheet.

Each collection lives in its own tab. Row 1 holds the headers ``id`` and
``document``; every following row is one record with its JSON document in
column B.
"""

import json
import logging
from typing import Any, Dict, Iterable, List

import pandas as pd

from src.models import AppUser, ProductionEvent, StaffMember
from src.repositories import seed_data
from src.repositories.base import COLLECTIONS, EVENTS, STAFF, USERS, DataRepository
from src.services.errors import InvalidRecordError
from src.services.google_sheets_service import GoogleSheetsService
from src.utils.logging_utils import log_operation

logger = logging.getLogger(__name__)

ID_COLUMN = "id"
DOCUMENT_COLUMN = "document"

# Google Sheets limit per cell
MAX_CELL_CHARACTERS = 50000


class SheetsDocumentRepository(DataRepository):
    """
    Stores collections as JSON rows in a spreadsheet.

    An empty users tab reads as the bootstrap administrator, so a freshly
    created spreadsheet can always be logged into.
    """

    def __init__(self, sheets_service: GoogleSheetsService, spreadsheet_id: str):
        self.sheets_service = sheets_service
        self.spreadsheet_id = spreadsheet_id

    def _range(self, name: str) -> str:
        return f"{name}!A:B"

    def ensure_tabs(self) -> None:
        """Create the collection tabs that are missing."""
        self.sheets_service.ensure_sheets(self.spreadsheet_id, list(COLLECTIONS))

    def _read_collection(self, name: str) -> List[Dict[str, Any]]:
        df = self.sheets_service.read_sheet(self.spreadsheet_id, self._range(name))

        documents = []
        if not df.empty and DOCUMENT_COLUMN in df.columns:
            for row_number, raw in enumerate(df[DOCUMENT_COLUMN], start=2):
                if not str(raw).strip():
                    continue
                try:
                    document = json.loads(raw)
                except (TypeError, ValueError) as e:
                    logger.error(f"Unreadable document in {name} row {row_number}: {e}")
                    continue
                if isinstance(document, dict):
                    documents.append(document)

        if name == USERS and not documents:
            logger.info("Users tab is empty; using bootstrap administrator")
            return [user.to_document() for user in seed_data.default_users()]

        return documents

    def _write_collection(self, name: str, documents: List[Dict[str, Any]]) -> None:
        serialized = [json.dumps(d, ensure_ascii=False) for d in documents]
        for document, text in zip(documents, serialized):
            if len(text) > MAX_CELL_CHARACTERS:
                raise InvalidRecordError(
                    f"Record {document.get('id', '?')} in {name} is {len(text)} characters "
                    f"long; a spreadsheet cell holds at most {MAX_CELL_CHARACTERS}"
                )

        df = pd.DataFrame(
            {
                ID_COLUMN: [str(d.get("id", "")) for d in documents],
                DOCUMENT_COLUMN: serialized,
            },
            columns=[ID_COLUMN, DOCUMENT_COLUMN],
        )
        # Overwrite in place, then drop rows left over from a longer collection.
        # A failed write leaves the previous rows readable.
        self.sheets_service.write_sheet(
            self.spreadsheet_id, f"{name}!A1", df, include_headers=True
        )
        first_stale_row = len(documents) + 2
        self.sheets_service.clear_sheet_range(
            self.spreadsheet_id, f"{name}!A{first_stale_row}:B"
        )

    @log_operation(level="INFO")
    def seed(
        self,
        events: Iterable[ProductionEvent],
        staff: Iterable[StaffMember],
        users: Iterable[AppUser],
    ) -> None:
        """
        Upload a full dataset, replacing what is in the spreadsheet.

        Staff records are keyed by DNI when they have one, so the same
        person uploaded twice ends up as a single record.
        """
        self.ensure_tabs()

        stamped = [event.with_stamped_shifts() for event in events]
        self._write_collection(EVENTS, self._seed_documents(stamped))

        staff_documents: Dict[str, Dict[str, Any]] = {}
        for document in self._seed_documents(staff, key=lambda m: m.dni):
            staff_documents[document["id"]] = document
        self._write_collection(STAFF, list(staff_documents.values()))

        self._write_collection(USERS, self._seed_documents(users))
        logger.info(
            f"Seeded {len(stamped)} events, {len(staff_documents)} staff "
            f"into spreadsheet {self.spreadsheet_id}"
        )
