"""Uniform calls to plain and coroutine functions."""

import inspect
from typing import Any


async def invoke(func: Any, /, *args: Any, **kwargs: Any) -> Any:
    """Call *func*, awaiting whatever awaitable it returns.

    Route handlers, error handlers and lifespan hooks may each be
    ``def`` or ``async def``.
    """
    outcome = func(*args, **kwargs)
    return await outcome if inspect.isawaitable(outcome) else outcome
