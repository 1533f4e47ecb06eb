"""Cooperative cancellation for update checks."""

import asyncio
import threading
from typing import Awaitable, Optional, TypeVar

from .constants import ABORT_POLL_INTERVAL
from .errors import Cancelled

T = TypeVar("T")


class AbortToken:
    """Thread-safe flag threaded through every fetch.

    ``abort()`` may be called from any thread (typically the UI thread);
    work running on the event loop notices it at its next await point.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def abort(self) -> None:
        self._event.set()

    @property
    def is_aborted(self) -> bool:
        return self._event.is_set()

    def check(self) -> None:
        """Raise Cancelled if the token has been triggered."""
        if self._event.is_set():
            raise Cancelled()

    async def guard(self, awaitable: Awaitable[T]) -> T:
        """Await ``awaitable``, cancelling it if the token fires first.

        Raises:
            Cancelled: If the token is triggered before the awaitable finishes.
        """
        if self._event.is_set():
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            raise Cancelled()
        task = asyncio.ensure_future(awaitable)
        try:
            while True:
                done, _ = await asyncio.wait({task}, timeout=ABORT_POLL_INTERVAL)
                if done:
                    return task.result()
                if self._event.is_set():
                    task.cancel()
                    await asyncio.gather(task, return_exceptions=True)
                    raise Cancelled()
        except asyncio.CancelledError:
            task.cancel()
            raise


async def guarded(abort: Optional[AbortToken], awaitable: Awaitable[T]) -> T:
    """Await ``awaitable`` under ``abort`` if one is given."""
    if abort is None:
        return await awaitable
    return await abort.guard(awaitable)
