"""
Shared JSON-over-HTTP request helper for the routing and weather clients.

Maps transport errors and status codes onto the collaborator error taxonomy
and retries rate-limited (429) and server-side (5xx) responses with
exponential backoff plus jitter.
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Any

import httpx

from daybook.errors import CollaboratorError

logger = logging.getLogger(__name__)

RETRYABLE_STATUS = {429, 500, 502, 503, 504}


def retry_delay(attempt: int, base_delay: float) -> float:
    """Exponential backoff with up to 0.3s of jitter."""
    return base_delay * (2**attempt) + random.uniform(0, 0.3)


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    params: dict[str, Any],
    failure: type[CollaboratorError],
    max_retries: int = 3,
    base_delay: float = 1.0,
) -> dict[str, Any]:
    """GET url and decode a JSON object body.

    Raises:
        failure: On unauthorized, exhausted retries, unexpected status codes,
            transport errors or a non-JSON body
    """
    attempt = 0
    while True:
        try:
            response = await client.get(url, params=params)
        except httpx.RequestError as e:
            if attempt < max_retries:
                await asyncio.sleep(retry_delay(attempt, base_delay))
                attempt += 1
                continue
            raise failure(f"Network error: {e}") from e

        status = response.status_code
        if 200 <= status < 300:
            try:
                data = response.json()
            except ValueError as e:
                raise failure(f"Decoding error: {e}", status_code=status) from e
            if not isinstance(data, dict):
                raise failure("Decoding error: expected a JSON object", status_code=status)
            return data

        if status == 401:
            raise failure("Unauthorized access", status_code=status)

        if status in RETRYABLE_STATUS and attempt < max_retries:
            delay = retry_delay(attempt, base_delay)
            logger.info(f"Retrying {url} after status {status} in {delay:.1f}s")
            await asyncio.sleep(delay)
            attempt += 1
            continue

        if status == 429:
            raise failure("Rate limit exceeded", status_code=status)
        if status >= 500:
            raise failure(f"Server error with code: {status}", status_code=status)
        raise failure(f"Unexpected status code: {status}", status_code=status)


__all__ = ["RETRYABLE_STATUS", "get_json", "retry_delay"]
