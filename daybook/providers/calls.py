"""
Call-site wrappers for collaborator calls.

Two failure modes are kept apart:

    best_effort  - the result is optional; any failure becomes None and is
                   logged, the surrounding operation carries on
    required     - the result is needed; any failure aborts the operation
                   as the given CollaboratorError subclass

Usage:
    location = await best_effort(lambda: self.locations.current(), "current location")
    directions = await required(
        lambda: self.routes.directions(origin, destination),
        RoutingFailure,
        "directions",
    )
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from daybook.errors import CollaboratorError, DaybookError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def best_effort(call: Callable[[], Awaitable[T | None]], what: str) -> T | None:
    try:
        return await call()
    except Exception as e:
        logger.warning(f"Best-effort {what} failed, continuing without it: {e}")
        return None


async def required(
    call: Callable[[], Awaitable[T]],
    failure: type[CollaboratorError],
    what: str,
) -> T:
    try:
        return await call()
    except DaybookError:
        raise
    except Exception as e:
        logger.error(f"Required {what} failed: {e}")
        raise failure(f"{what} failed: {e}") from e


__all__ = ["best_effort", "required"]
