from datetime import datetime
from typing import Protocol

from domain.model.user import UserRecord


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Implementations own email uniqueness and raise domain errors
    rather than returning sentinels.
    """
    def create_user(self, record: UserRecord) -> str:
        """Persist a new user and return its ID. Raise DuplicateUserError on a taken email.

        ``record.id`` is ignored; the repository assigns the identifier.
        """
        ...

    def get_user_by_email(self, email: str) -> UserRecord:
        """Find a user by email. Raise UserNotFoundError if absent."""
        ...

    def get_user_by_id(self, user_id: str) -> UserRecord:
        """Find a user by ID. Raise UserNotFoundError if absent."""
        ...

    def update_user_by_id(self, user_id: str, activated: bool, updated_at: datetime) -> None:
        """Set activation state. Raise UserNotFoundError if absent."""
        ...
