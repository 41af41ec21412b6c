"""Application user model."""

from enum import Enum

from pydantic import Field, field_validator

from src.models.base import BaseDataModel


class UserRole(str, Enum):
    """Access level of an application user."""

    ADMIN = "ADMIN"
    COORDINATOR = "COORDINATOR"


class AppUser(BaseDataModel):
    """An account allowed to use the dashboard.

    Passwords are stored and compared as plaintext, matching the documents
    already present in the shared store.

    Attributes:
        id: Unique user identifier
        username: Login name (unique, case-insensitive)
        password: Login password
        name: Display name
        role: ADMIN or COORDINATOR
    """

    id: str = Field(..., min_length=1)
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    role: UserRole = UserRole.COORDINATOR

    @field_validator("username", "name")
    @classmethod
    def validate_not_empty(cls, v: str, info) -> str:
        """Validate that string fields are not empty or whitespace only.

        Raises:
            ValueError: If the value is empty or whitespace only
        """
        if not v or not v.strip():
            raise ValueError(f"{info.field_name} cannot be empty or whitespace")
        return v.strip()

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
