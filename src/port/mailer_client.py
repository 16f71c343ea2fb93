"""Mailer port — outbound interface to the email dispatch service."""

from typing import Protocol


class MailerClient(Protocol):
    async def send_activation_email(self, email: str, first_name: str, activation_token: str) -> None: ...
