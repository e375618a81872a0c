import asyncio
import functools
from typing import Any, Callable, Dict, Mapping, Optional, Set

from httpx import QueryParams

from .exceptions import InvalidOptionsError

Callback = Callable[[Optional[BaseException], Any], Any]

# Strong references to callback tasks until they finish
_background_tasks: Set[asyncio.Task] = set()


def clean_query(query: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Drop parameters whose value is None; falsy values such as 0 or "" are kept"""
    if not query:
        return {}
    return {k: v for k, v in query.items() if v is not None}


def build_query_string(query: Optional[Mapping[str, Any]]) -> str:
    """Encode a flat mapping as a URL query string, without the leading '?'"""
    cleaned = clean_query(query)
    if not cleaned:
        return ""
    return str(QueryParams(cleaned))


def _deliver(callback: Callback, task: asyncio.Task):
    if task.cancelled():
        callback(asyncio.CancelledError(), None)
        return
    error = task.exception()
    if error is not None:
        callback(error, None)
    else:
        callback(None, task.result())


def with_callback(func):
    """
    Decorator giving an async method two calling conventions.

    Without a ``callback`` keyword the coroutine is returned for the caller to await. With one,
    the coroutine is scheduled on the running loop and the callback receives ``(None, result)``
    or ``(error, None)`` when it finishes; the scheduled task is returned and
    does not need to be kept by the caller.
    """
    @functools.wraps(func)
    def wrapper(self, *args, callback: Optional[Callback] = None, **kwargs):
        if callback is None:
            return func(self, *args, **kwargs)
        if not callable(callback):
            raise InvalidOptionsError("callback must be callable")
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            raise InvalidOptionsError("A running event loop is required when a callback is provided") from e
        task = loop.create_task(func(self, *args, **kwargs))
        _background_tasks.add(task)
        task.add_done_callback(functools.partial(_deliver, callback))
        task.add_done_callback(_background_tasks.discard)
        return task
    return wrapper
