"""Storage interface shared by the local and remote document stores.

Records are kept as three collections of JSON documents (events, staff and
users). Concrete stores only implement reading and writing a whole
collection; the record-level operations are built on top of that here.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterable, List, Optional, Type, TypeVar

from pydantic import ValidationError

from src.models import AppUser, BaseDataModel, ProductionEvent, StaffMember, TechnicianShift
from src.utils.logging_utils import LogContext, log_operation

logger = logging.getLogger(__name__)

EVENTS = "events"
STAFF = "staff"
USERS = "users"
COLLECTIONS = (EVENTS, STAFF, USERS)

ModelT = TypeVar("ModelT", bound=BaseDataModel)

# Shift fields that identify the shift and cannot be changed by an update
_IMMUTABLE_SHIFT_KEYS = {"id", "eventId", "event_id"}


def _shift_update_document(updates: Dict[str, Any]) -> Dict[str, Any]:
    """Translate update keys (field names or stored aliases) to aliases."""
    document = {}
    for key, value in updates.items():
        if key in _IMMUTABLE_SHIFT_KEYS:
            continue
        field_info = TechnicianShift.model_fields.get(key)
        alias = field_info.alias if field_info is not None and field_info.alias else key
        document[alias] = value
    return document


class DataRepository(ABC):
    """Abstract document store for events, staff and users."""

    @abstractmethod
    def _read_collection(self, name: str) -> List[Dict[str, Any]]:
        """Return all documents of a collection, in stored order."""

    @abstractmethod
    def _write_collection(self, name: str, documents: List[Dict[str, Any]]) -> None:
        """Replace all documents of a collection."""

    def _load(self, name: str, model: Type[ModelT]) -> List[ModelT]:
        records = []
        for document in self._read_collection(name):
            try:
                records.append(model.model_validate(document))
            except ValidationError as e:
                logger.warning(
                    f"Skipping invalid {name} document {document.get('id', '?')}: "
                    f"{e.error_count()} validation errors"
                )
        return records

    def _upsert(self, name: str, record: BaseDataModel) -> None:
        documents = self._read_collection(name)
        document = record.to_document()
        for index, existing in enumerate(documents):
            if existing.get("id") == document["id"]:
                documents[index] = document
                break
        else:
            documents.append(document)
        self._write_collection(name, documents)

    def _remove(self, name: str, record_id: str) -> bool:
        documents = self._read_collection(name)
        remaining = [d for d in documents if d.get("id") != record_id]
        if len(remaining) == len(documents):
            return False
        self._write_collection(name, remaining)
        return True

    # Events

    def list_events(self) -> List[ProductionEvent]:
        return self._load(EVENTS, ProductionEvent)

    def get_event(self, event_id: str) -> Optional[ProductionEvent]:
        for event in self.list_events():
            if event.id == event_id:
                return event
        return None

    @log_operation
    def save_event(self, event: ProductionEvent) -> ProductionEvent:
        """Create or replace an event, stamping its id on every shift."""
        stamped = event.with_stamped_shifts()
        self._upsert(EVENTS, stamped)
        logger.info(f"Saved event {stamped.id} ({len(stamped.shifts)} shifts)")
        return stamped

    @log_operation
    def delete_event(self, event_id: str) -> bool:
        """Delete an event. Returns False if it did not exist."""
        return self._remove(EVENTS, event_id)

    @log_operation
    def update_shift(
        self, event_id: str, shift_id: str, updates: Dict[str, Any]
    ) -> Optional[ProductionEvent]:
        """
        Merge partial fields onto one shift and save its event.

        Args:
            event_id: Owning event
            shift_id: Shift to edit
            updates: Fields to overwrite, by field name (``invoice_number``)
                or stored name (``invoiceNumber``)

        Returns:
            The saved event, or None if the event does not exist. An unknown
            shift id leaves the event unchanged.
        """
        with LogContext(event_id=event_id, shift_id=shift_id):
            event = self.get_event(event_id)
            if event is None:
                logger.warning(f"Cannot update shift of unknown event {event_id}")
                return None

            if event.find_shift(shift_id) is None:
                logger.warning(f"Shift {shift_id} not found in event {event_id}")
                return event

            changes = _shift_update_document(updates)
            shifts = [
                TechnicianShift.model_validate({**shift.to_document(), **changes})
                if shift.id == shift_id
                else shift
                for shift in event.shifts
            ]
            logger.info(f"Updating shift fields: {', '.join(sorted(changes)) or 'none'}")
            return self.save_event(event.model_copy(update={"shifts": shifts}))

    # Staff

    def list_staff(self) -> List[StaffMember]:
        return self._load(STAFF, StaffMember)

    @log_operation
    def save_staff(self, member: StaffMember) -> StaffMember:
        self._upsert(STAFF, member)
        return member

    @log_operation
    def delete_staff(self, staff_id: str) -> bool:
        return self._remove(STAFF, staff_id)

    # Users

    def list_users(self) -> List[AppUser]:
        return self._load(USERS, AppUser)

    @log_operation
    def save_user(self, user: AppUser) -> AppUser:
        self._upsert(USERS, user)
        return user

    @log_operation
    def delete_user(self, user_id: str) -> bool:
        return self._remove(USERS, user_id)

    # Bulk

    def _seed_documents(
        self,
        records: Iterable[BaseDataModel],
        key: Callable[[Any], str] = lambda record: record.id,
    ) -> List[Dict[str, Any]]:
        documents = []
        for record in records:
            document = record.to_document()
            document["id"] = key(record) or document.get("id", "")
            documents.append(document)
        return documents

    @log_operation(level="INFO")
    def seed(
        self,
        events: Iterable[ProductionEvent],
        staff: Iterable[StaffMember],
        users: Iterable[AppUser],
    ) -> None:
        """Replace every collection with the given records."""
        stamped = [event.with_stamped_shifts() for event in events]
        self._write_collection(EVENTS, self._seed_documents(stamped))
        self._write_collection(STAFF, self._seed_documents(staff))
        self._write_collection(USERS, self._seed_documents(users))
