"""Staff directory: search and maintenance of technician master records."""

import logging
from typing import List, Optional

from src.models import StaffMember, generate_id
from src.repositories.base import DataRepository
from src.services.errors import InvalidRecordError

logger = logging.getLogger(__name__)


def _matches(member: StaffMember, term: str) -> bool:
    fields = (
        member.first_name,
        member.last_name,
        member.dni,
        member.role,
        member.province or "",
    )
    return any(term in value.lower() for value in fields)


class StaffDirectory:
    """Technician master records stored in a DataRepository."""

    def __init__(self, repository: DataRepository):
        self.repository = repository

    def search(self, term: Optional[str] = None) -> List[StaffMember]:
        """
        Find staff whose first name, last name, DNI, role or province
        contains ``term`` (case-insensitive).

        Results are sorted by surname, then first name. An empty term lists
        everyone.
        """
        needle = (term or "").strip().lower()
        members = [m for m in self.repository.list_staff() if not needle or _matches(m, needle)]
        return sorted(members, key=lambda m: m.sort_key)

    def find_by_dni(self, dni: str) -> Optional[StaffMember]:
        """Look up a technician by national ID, ignoring case and spacing."""
        wanted = (dni or "").strip().lower()
        if not wanted:
            return None
        for member in self.repository.list_staff():
            if member.dni.lower() == wanted:
                return member
        return None

    def save(self, member: StaffMember) -> StaffMember:
        """
        Create or update a staff record.

        Raises:
            InvalidRecordError: If the first name or DNI is missing
        """
        if not member.first_name or not member.dni:
            raise InvalidRecordError("First name and DNI are required")

        if not member.id:
            member = member.model_copy(update={"id": generate_id()})

        saved = self.repository.save_staff(member)
        logger.info(f"Saved staff record {saved.id}")
        return saved

    def delete(self, staff_id: str) -> bool:
        return self.repository.delete_staff(staff_id)
