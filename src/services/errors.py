"""Domain errors raised by the crew billing services."""


class CrewBillingError(Exception):
    """Base class for domain errors."""


class EventNotFoundError(CrewBillingError):
    """Raised when an event id does not exist in the store."""

    def __init__(self, event_id: str):
        self.event_id = event_id
        super().__init__(f"Event not found: {event_id}")


class InvalidRecordError(CrewBillingError):
    """Raised when a record is missing required fields."""


class DuplicateCrewMemberError(CrewBillingError):
    """Raised when a technician is added twice to the same event."""

    def __init__(self, person_name: str, dni: str = ""):
        self.person_name = person_name
        self.dni = dni
        label = f"{person_name} ({dni})" if dni else person_name
        super().__init__(f"{label} is already on this event's crew")


class DuplicateUsernameError(CrewBillingError):
    """Raised when a username is already taken."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"Username already exists: {username}")


class SelfDeletionError(CrewBillingError):
    """Raised when a user tries to delete their own account."""

    def __init__(self):
        super().__init__("You cannot delete your own account")
