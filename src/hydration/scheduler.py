# ==============================================
# Deferred Schedulers
# ==============================================
#
# PURPOSE:
#   "Run this on the next idle tick of the same thread." The hydration
#   pass uses it to deliver its completion signal after the current
#   initialization step has finished, so listeners attached later in
#   that same step still hear it.
#
# CLASSES:
# --------
# - Scheduler (Protocol)   → call_later(callback)
# - DeferredScheduler      → explicit queue, drained by the host loop
#                            via run_pending()
# - AsyncioScheduler       → hands callbacks to loop.call_soon
#
# ==============================================

import asyncio
from collections import deque
from typing import Callable, Deque, Optional, Protocol


Callback = Callable[[], None]


class Scheduler(Protocol):
    def call_later(self, callback: Callback) -> None:
        ...


class DeferredScheduler:
    """Same-thread queue of callbacks for the host's next idle tick."""

    def __init__(self):
        self._queue: Deque[Callback] = deque()

    @property
    def pending(self) -> int:
        return len(self._queue)

    def call_later(self, callback: Callback) -> None:
        self._queue.append(callback)

    def run_pending(self) -> int:
        """
        Run the callbacks queued before this tick.

        Callbacks queued while draining wait for the next tick.
        An exception from a callback propagates; callbacks not yet run
        stay queued.

        Returns:
            Number of callbacks run
        """
        count = len(self._queue)
        for _ in range(count):
            callback = self._queue.popleft()
            callback()
        return count


class AsyncioScheduler:
    """Schedules callbacks on an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop or asyncio.get_running_loop()

    def call_later(self, callback: Callback) -> None:
        self._loop.call_soon(callback)
