"""Shared HTTP helpers for adapters calling sibling services."""

from typing import Any

import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

API_TIMEOUT_SECONDS = 5.0


@retry(
    retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=4),
    reraise=True,
)
async def post_json_with_retry(client: httpx.AsyncClient, path: str, payload: dict[str, Any]) -> httpx.Response:
    """POST JSON with automatic retry on transient failures."""
    return await client.post(path, json=payload)


def error_message(response: httpx.Response) -> str:
    """Best-effort error text from a failed response."""
    try:
        data = response.json()
    except ValueError:
        return response.text[:200] or f"HTTP {response.status_code}"
    if isinstance(data, dict):
        return str(data.get("error") or data.get("message") or data.get("detail") or f"HTTP {response.status_code}")
    return f"HTTP {response.status_code}"
