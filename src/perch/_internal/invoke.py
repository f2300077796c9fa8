"""Invoke helpers — call sync or async handlers uniformly.

Terminal handlers can be ``def`` or ``async def``. Any code that calls
a user-provided handler must handle both cases. This module provides
a single helper so the sync/async check lives in exactly one place.

Usage::

    from perch._internal.invoke import invoke

    result = await invoke(handler, request)
"""

import functools
import inspect
from typing import Any

import anyio.to_thread


async def invoke(handler: Any, *args: Any, in_thread: bool = False, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's a coroutine.

    With ``in_thread=True`` a plain ``def`` handler runs on an anyio
    worker thread so it cannot block the event loop. Coroutine
    functions always run on the loop.
    """
    if in_thread and not inspect.iscoroutinefunction(handler):
        result = await anyio.to_thread.run_sync(functools.partial(handler, *args, **kwargs))
    else:
        result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
