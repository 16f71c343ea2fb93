"""In-memory implementation of UserRepository for testing."""

import threading
import uuid
from dataclasses import replace
from datetime import datetime

from domain.model.errors import DuplicateUserError, UserNotFoundError
from domain.model.user import UserRecord


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, UserRecord] = {}
        self._lock = threading.Lock()

    # ── write operations ─────────────────────────────────────

    def create_user(self, record: UserRecord) -> str:
        with self._lock:
            if any(u.email == record.email for u in self.store.values()):
                raise DuplicateUserError()

            user_id = uuid.uuid4().hex
            self.store[user_id] = replace(record, id=user_id)
            return user_id

    def update_user_by_id(self, user_id: str, activated: bool, updated_at: datetime) -> None:
        with self._lock:
            user = self.store.get(user_id)
            if not user:
                raise UserNotFoundError("unable to update by id: user not found")
            self.store[user_id] = replace(user, activated=activated, updated_at=updated_at)

    # ── read operations ──────────────────────────────────────

    def get_user_by_email(self, email: str) -> UserRecord:
        for user in list(self.store.values()):
            if user.email == email:
                return replace(user)
        raise UserNotFoundError("user not found by email")

    def get_user_by_id(self, user_id: str) -> UserRecord:
        user = self.store.get(user_id)
        if not user:
            raise UserNotFoundError("user not found by id")
        return replace(user)
