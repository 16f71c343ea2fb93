"""Token service HTTP adapter.

Implements TokenClient against the activation token service:

    POST /v1/token/activation           {"userId"}          -> {"activationToken"}
    POST /v1/token/activation/validate  {"activationToken"} -> {"userId"}
"""

import logging
from typing import Any

import httpx

from adapter.external.http import API_TIMEOUT_SECONDS, error_message, post_json_with_retry
from domain.model.errors import TokenServiceError

logger = logging.getLogger(__name__)

CREATE_PATH = "/v1/token/activation"
VALIDATE_PATH = "/v1/token/activation/validate"


class HttpTokenClient:
    """Adapter that calls the token service over HTTP."""

    def __init__(
        self,
        base_url: str,
        timeout: float = API_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not base_url:
            raise ValueError("base_url is required")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def create_activation_token(self, user_id: str) -> str:
        data = await self._post(CREATE_PATH, {"userId": user_id})
        token = data.get("activationToken")
        if not isinstance(token, str) or not token:
            raise TokenServiceError("token service response is missing activationToken")
        return token

    async def validate_activation_token(self, activation_token: str) -> str:
        data = await self._post(VALIDATE_PATH, {"activationToken": activation_token})
        user_id = data.get("userId")
        if not isinstance(user_id, str) or not user_id:
            raise TokenServiceError("token service response is missing userId")
        return user_id

    async def _post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, transport=self._transport,
            ) as client:
                response = await post_json_with_retry(client, path, payload)
        except httpx.RequestError as e:
            logger.warning(
                "Token service request error",
                extra={"path": path, "error_type": type(e).__name__},
            )
            raise TokenServiceError(f"token service unreachable: {type(e).__name__}") from e

        if response.is_error:
            message = error_message(response)
            logger.warning(
                "Token service HTTP error",
                extra={"path": path, "status_code": response.status_code},
            )
            raise TokenServiceError(message, status_code=response.status_code)

        try:
            data = response.json()
        except ValueError:
            raise TokenServiceError("invalid response from token service") from None
        if not isinstance(data, dict):
            raise TokenServiceError("invalid response from token service")
        return data
