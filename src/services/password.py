"""bcrypt implementation of the PasswordManager port."""

import bcrypt

from domain.model.errors import PasswordMismatchError

# Using 12 rounds (2^12 = 4096 iterations) for secure password hashing
BCRYPT_ROUNDS = 12


class BcryptPasswordManager:
    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        self.rounds = rounds

    def generate_hash(self, password: str) -> str:
        """Hash password using bcrypt.

        Args:
            password: Plain text password

        Returns:
            Bcrypt hashed password as string
        """
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def compare_hash(self, hashed_password: str, password: str) -> None:
        """Verify password against hash.

        Raises:
            PasswordMismatchError: password does not match, or the stored
                hash is not a bcrypt hash
        """
        try:
            matches = bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
        except ValueError as e:
            raise PasswordMismatchError("stored hash is not a valid bcrypt hash") from e
        if not matches:
            raise PasswordMismatchError("password does not match")
