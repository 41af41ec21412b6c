"""Application accounts and login."""

import logging
from typing import List, Optional, Union

from pydantic import ValidationError

from src.models import AppUser, UserRole, generate_id
from src.repositories.base import DataRepository
from src.services.errors import DuplicateUsernameError, InvalidRecordError, SelfDeletionError
from src.utils.logging_utils import sanitize_sensitive_data

logger = logging.getLogger(__name__)


class UserService:
    """Account management for dashboard users."""

    def __init__(self, repository: DataRepository):
        self.repository = repository

    def list_users(self) -> List[AppUser]:
        return self.repository.list_users()

    def add_user(
        self,
        username: str,
        password: str,
        name: str,
        role: Union[UserRole, str] = UserRole.COORDINATOR,
    ) -> AppUser:
        """
        Create an account.

        Raises:
            InvalidRecordError: If any field is missing
            DuplicateUsernameError: If the username is taken (ignoring case)
        """
        username = (username or "").strip()
        if not username or not password or not (name or "").strip():
            raise InvalidRecordError("All fields are required")

        if any(u.username.lower() == username.lower() for u in self.list_users()):
            raise DuplicateUsernameError(username)

        try:
            user = AppUser(
                id=generate_id(), username=username, password=password, name=name, role=role
            )
        except ValidationError as e:
            raise InvalidRecordError(f"Invalid user: {e.errors()[0]['msg']}") from e

        self.repository.save_user(user)
        logger.info(
            f"Created user {user.username}",
            extra={"user": sanitize_sensitive_data(user.to_document())},
        )
        return user

    def delete_user(self, user_id: str, acting_user: AppUser) -> bool:
        """
        Delete an account.

        Raises:
            SelfDeletionError: If ``acting_user`` tries to delete itself
        """
        if user_id == acting_user.id:
            raise SelfDeletionError()
        deleted = self.repository.delete_user(user_id)
        if deleted:
            logger.info(f"User {user_id} deleted by {acting_user.username}")
        return deleted

    def authenticate(self, username: str, password: str) -> Optional[AppUser]:
        """Return the user whose username and password match exactly, or None."""
        for user in self.list_users():
            if user.username == username and user.password == password:
                logger.info(f"User {username} logged in")
                return user
        logger.warning(f"Failed login for {username!r}")
        return None
