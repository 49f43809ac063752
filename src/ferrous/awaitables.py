"""Capture the outcome of an asynchronous computation that is already running.

``Result.from_async`` takes a factory and starts the computation itself.
``from_awaitable`` is for the other shape: the caller already holds a
coroutine object, ``Task`` or ``Future`` and only wants its outcome as a
``Result``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TypeVar

from ferrous.result import CONTROL_FLOW_EXCEPTIONS, Result

if TYPE_CHECKING:
    from collections.abc import Awaitable

__all__ = ["from_awaitable"]

log = logging.getLogger(__name__)

T = TypeVar("T")


async def from_awaitable(awaitable: Awaitable[T]) -> Result[T, BaseException]:
    """Await *awaitable* and wrap its outcome.

    Args:
        awaitable: An in-flight computation (coroutine object, task, future).

    Returns:
        ``Ok(value)`` when it resolves, ``Err(exception)`` when it raises.
        Interpreter control flow (``CONTROL_FLOW_EXCEPTIONS``), cancellation
        of the awaiting task included, propagates.

    Example:
        task = asyncio.create_task(fetch_profile(user_id))
        ...
        profile = (await from_awaitable(task)).unwrap_or(DEFAULT_PROFILE)
    """
    try:
        value = await awaitable
    except CONTROL_FLOW_EXCEPTIONS:
        raise
    except BaseException as exc:
        log.debug("Captured %s from awaitable %r", type(exc).__name__, awaitable)
        return Result(exc)
    return Result(value)
