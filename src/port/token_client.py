"""Token port — outbound interface to the activation token service."""

from typing import Protocol


class TokenClient(Protocol):
    """Port for minting and resolving opaque activation tokens.

    Expiry and single-use rules are enforced by the implementation,
    never by callers.
    """

    async def create_activation_token(self, user_id: str) -> str: ...

    async def validate_activation_token(self, activation_token: str) -> str:
        """Resolve a token to the user ID it was minted for."""
        ...
