"""
Periodic notification re-evaluation for an active board session.

A small polling loop that:
- reads the current in-memory task snapshot,
- derives notifications from it,
- merges them into the session's notification board.

It never fetches; fetching is the client's job. One monitor runs per
session and is cancelled when the session ends.
"""

import asyncio
from typing import Callable, Iterable, Optional

from app.config import REMINDER_POLL_SECONDS
from app.services.notification_evaluator import NotificationBoard, evaluate
from app.utils.logger import get_logger

logger = get_logger(__name__)


class ReminderMonitor:
    """Cancellable periodic evaluation tied to a session's lifetime."""

    def __init__(
        self,
        snapshot: Callable[[], Iterable],
        board: NotificationBoard,
        interval: float = REMINDER_POLL_SECONDS,
    ):
        self._snapshot = snapshot
        self._board = board
        self._interval = interval
        self._lock = asyncio.Lock()
        self._task: Optional[asyncio.Task] = None
        self.ticks = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def tick(self) -> int:
        """Run one evaluation pass. Returns the number of notifications derived."""
        async with self._lock:
            notifications = evaluate(list(self._snapshot()))
            self._board.add_all(notifications)
            self.ticks += 1
            return len(notifications)

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                count = await self.tick()
            except Exception as e:
                # A bad snapshot must not kill the session's monitor
                logger.exception("Notification evaluation failed", error=str(e))
                continue
            logger.debug("Notification pass complete", derived=count)

    def start(self) -> None:
        """Start the loop on the running event loop. No-op if already running."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.info("Reminder monitor started", interval=self._interval)

    def cancel(self) -> None:
        """Request cancellation without waiting, for synchronous callers."""
        if self._task is not None:
            self._task.cancel()
            self._task = None
            logger.info("Reminder monitor cancelled")

    async def stop(self) -> None:
        """Cancel the loop and wait for it to finish."""
        if self._task is None:
            return
        task, self._task = self._task, None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Reminder monitor stopped")
