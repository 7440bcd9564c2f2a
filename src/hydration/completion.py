# ==============================================
# CompletionSignal
# ==============================================
#
# PURPOSE:
#   One-shot "preferences loaded" notification.
#
#   - subscribe(callback) before it fires → called once when it fires
#   - subscribe(callback) after it fired  → called once on the next
#                                           scheduler tick
#   - fire() runs at most once; later calls are ignored
#   - a listener that raises does not stop the rest: they are handed to
#     the scheduler and run on the next tick
#
#   No payload. Not a general event bus.
#
# ==============================================

from collections import deque
from typing import List

from src.hydration.scheduler import Callback, Scheduler


class CompletionSignal:
    def __init__(self, scheduler: Scheduler):
        self._scheduler = scheduler
        self._listeners: List[Callback] = []
        self._fired = False

    @property
    def fired(self) -> bool:
        return self._fired

    def subscribe(self, callback: Callback) -> None:
        if self._fired:
            self._scheduler.call_later(callback)
        else:
            self._listeners.append(callback)

    def fire(self) -> bool:
        """
        Deliver the signal to every subscribed listener.

        Returns:
            False if the signal had already fired
        """
        if self._fired:
            return False
        self._fired = True

        pending = deque(self._listeners)
        self._listeners = []
        try:
            while pending:
                pending.popleft()()
        finally:
            # listeners after one that raised still get the signal, next tick
            for listener in pending:
                self._scheduler.call_later(listener)
        return True
