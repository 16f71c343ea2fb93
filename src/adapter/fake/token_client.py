"""In-memory implementation of TokenClient for local runs and testing."""

import asyncio
import base64
import secrets

from domain.model.errors import TokenServiceError


def generate_activation_token() -> str:
    """Unpadded base32 of 16 random bytes."""
    return base64.b32encode(secrets.token_bytes(16)).decode("ascii").rstrip("=")


class InMemoryTokenClient:
    """Mints single-use activation tokens kept in a dict.

    ``error`` makes every create call fail with that exception, ``delay``
    sleeps before answering.
    """

    def __init__(self, error: Exception | None = None, delay: float = 0.0):
        self.tokens: dict[str, str] = {}
        self.created: list[tuple[str, str]] = []
        self.error = error
        self.delay = delay

    async def create_activation_token(self, user_id: str) -> str:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error

        token = generate_activation_token()
        self.tokens[token] = user_id
        self.created.append((user_id, token))
        return token

    async def validate_activation_token(self, activation_token: str) -> str:
        user_id = self.tokens.pop(activation_token, None)
        if user_id is None:
            raise TokenServiceError("activation token is invalid or expired", status_code=404)
        return user_id
