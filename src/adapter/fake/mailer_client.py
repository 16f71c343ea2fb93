"""In-memory implementation of MailerClient for local runs and testing."""

import asyncio
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class SentActivationEmail:
    email: str
    first_name: str
    activation_token: str


class InMemoryMailerClient:
    def __init__(self, error: Exception | None = None, delay: float = 0.0):
        self.sent: list[SentActivationEmail] = []
        self.error = error
        self.delay = delay

    async def send_activation_email(self, email: str, first_name: str, activation_token: str) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error

        self.sent.append(SentActivationEmail(email, first_name, activation_token))
        logger.debug("Activation email recorded", extra={"email": email})
