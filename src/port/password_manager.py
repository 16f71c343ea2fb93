"""Password port — hashing and verification of user secrets."""

from typing import Protocol


class PasswordManager(Protocol):
    def generate_hash(self, password: str) -> str: ...

    def compare_hash(self, hashed_password: str, password: str) -> None:
        """Raise PasswordMismatchError when ``password`` does not match."""
        ...
