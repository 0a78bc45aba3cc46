"""Invoke helpers — call sync or async getters uniformly.

Getters can be ``def`` or ``async def``. This module keeps the sync/async
check in exactly one place.

Usage::

    from autoview._internal.invoke import invoke

    result = await invoke(getter, link)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
