"""
Best-effort side effects.

Work that must never delay or fail the request that triggered it (emails,
last-used timestamps) is scheduled here as a detached task. Failures are
logged and dropped.
"""

import asyncio
import logging
from typing import Awaitable, Set

logger = logging.getLogger(__name__)


class BestEffortRunner:
    def __init__(self):
        self._tasks: Set[asyncio.Task] = set()

    def submit(self, awaitable: Awaitable, label: str) -> asyncio.Task:
        task = asyncio.ensure_future(self._guard(awaitable, label))
        # The event loop only keeps weak references to tasks
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _guard(self, awaitable: Awaitable, label: str) -> None:
        try:
            await awaitable
        except asyncio.CancelledError:
            logger.warning(f"Best-effort task cancelled: {label}")
            raise
        except Exception:
            logger.exception(f"Best-effort task failed: {label}")

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait for every scheduled task to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)


best_effort = BestEffortRunner()
