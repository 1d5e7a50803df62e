from __future__ import annotations

import logging
from typing import Callable, Protocol

from flask_socketio import SocketIO


logger = logging.getLogger(__name__)

# Sleep granularity; a cancelled task exits within one slice.
CANCEL_POLL_SEC = 1.0


class TimerHandle:
    __slots__ = ("delay", "cancelled")

    def __init__(self, delay: float) -> None:
        self.delay = delay
        self.cancelled = False


class Timers(Protocol):
    def schedule(self, delay: float, fn: Callable[[], None]) -> TimerHandle: ...

    def cancel(self, handle: TimerHandle | None) -> None: ...


class SocketIOTimers:
    """One-shot delayed callbacks on Socket.IO background tasks.

    Works with whichever async mode the ``SocketIO`` instance runs on, since
    both the task and the sleep come from it. The task sleeps in
    ``poll_interval`` slices so a cancelled handle releases it early.
    """

    def __init__(self, socketio: SocketIO, poll_interval: float = CANCEL_POLL_SEC) -> None:
        self._socketio = socketio
        self._poll_interval = poll_interval

    def schedule(self, delay: float, fn: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle(delay)

        def _runner() -> None:
            remaining = delay
            while remaining > 0:
                step = min(self._poll_interval, remaining)
                self._socketio.sleep(step)
                remaining -= step
                if handle.cancelled:
                    return
            if handle.cancelled:
                return
            try:
                fn()
            except Exception:
                logger.exception("timer callback failed delay=%s", delay)

        self._socketio.start_background_task(_runner)
        return handle

    def cancel(self, handle: TimerHandle | None) -> None:
        if handle is not None:
            handle.cancelled = True
