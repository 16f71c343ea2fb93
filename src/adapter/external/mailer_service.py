"""Mailer service HTTP adapter.

Implements MailerClient by asking the mailer service to send the
activation email. The email links to the activation page with the token
as a query parameter.
"""

import logging
from urllib.parse import quote

import httpx

from adapter.external.http import API_TIMEOUT_SECONDS, error_message, post_json_with_retry
from domain.model.errors import MailerServiceError

logger = logging.getLogger(__name__)

ACTIVATE_PATH = "/v1/mailer/activate"
DEFAULT_FROM_ADDRESS = "the.team@flat-list.com"


class HttpMailerClient:
    """Adapter that calls the mailer service over HTTP."""

    def __init__(
        self,
        base_url: str,
        activation_page_url: str,
        from_address: str = DEFAULT_FROM_ADDRESS,
        timeout: float = API_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not base_url:
            raise ValueError("base_url is required")
        if not activation_page_url:
            raise ValueError("activation_page_url is required")
        self.base_url = base_url.rstrip("/")
        self.activation_page_url = activation_page_url
        self.from_address = from_address
        self.timeout = timeout
        self._transport = transport

    def activation_hyperlink(self, activation_token: str) -> str:
        return f"{self.activation_page_url}?token={quote(activation_token, safe='')}"

    async def send_activation_email(self, email: str, first_name: str, activation_token: str) -> None:
        """Send the activation email.

        Raises:
            MailerServiceError: on connection failure, non-2xx status, or a
                response that does not report success
        """
        payload = {
            "from": self.from_address,
            "to": email,
            "name": first_name,
            "activationHyperlink": self.activation_hyperlink(activation_token),
        }

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, transport=self._transport,
            ) as client:
                response = await post_json_with_retry(client, ACTIVATE_PATH, payload)
        except httpx.RequestError as e:
            logger.warning("Mailer service request error", extra={"error_type": type(e).__name__})
            raise MailerServiceError(f"mailer service unreachable: {type(e).__name__}") from e

        if response.is_error:
            logger.warning("Mailer service HTTP error", extra={"status_code": response.status_code})
            raise MailerServiceError(error_message(response), status_code=response.status_code)

        try:
            data = response.json()
        except ValueError:
            raise MailerServiceError("invalid response from mailer service") from None
        if not isinstance(data, dict) or not data.get("success"):
            raise MailerServiceError(error_message(response), status_code=response.status_code)

        logger.debug("Mailer accepted activation email")
