"""Strict FIFO executor running queued coroutines one at a time.

StyleCode allocation reads the highest sequence of a partition and writes the
next one back to PLM. Two allocations interleaving on the same partition would
compute the same number, so every assignment goes through a single
:class:`TaskQueue` that never runs more than one operation at once.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections import deque
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from ..exceptions import QueueClearedError
from .queue_models import (
    Operation,
    QueueCounters,
    QueueItem,
    QueueItemState,
    QueueStats,
)

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TaskQueue:
    """Run submitted operations sequentially in submission order.

    ``submit`` returns an :class:`asyncio.Future` right away. The future is
    resolved by the drain loop once the operation has run; a failing operation
    rejects only its own future and the loop moves on to the next item.
    """

    def __init__(self, *, clock: Callable[[], datetime] | None = None) -> None:
        self._items: deque[QueueItem] = deque()
        self._draining = False
        self._drain_task: asyncio.Task[None] | None = None
        self._counters = QueueCounters()
        self._clock = clock or _utcnow
        self._logger = logger

    @property
    def is_processing(self) -> bool:
        return self._draining

    def __len__(self) -> int:
        return len(self._items)

    def submit(self, operation: Operation, label: str) -> asyncio.Future[Any]:
        """Append ``operation`` to the tail and start draining when idle."""

        loop = asyncio.get_running_loop()
        item = QueueItem(
            id=uuid4().hex,
            label=label,
            operation=operation,
            future=loop.create_future(),
            submitted_at=self._clock(),
        )
        self._items.append(item)
        self._counters.total += 1
        self._logger.info(
            "queue.task.added",
            extra={"task_id": item.id, "label": label, "queue_size": len(self._items)},
        )

        if not self._draining:
            self._draining = True
            self._drain_task = loop.create_task(self._drain(), name="stylecode-queue-drain")
        return item.future

    async def _drain(self) -> None:
        try:
            while self._items:
                item = self._items.popleft()
                await self._run_item(item)
        finally:
            self._draining = False
            self._drain_task = None
        self._logger.info("queue.idle")

    async def _run_item(self, item: QueueItem) -> None:
        item.state = QueueItemState.RUNNING
        self._counters.in_progress += 1
        self._logger.info(
            "queue.task.processing",
            extra={
                "task_id": item.id,
                "label": item.label,
                "submitted_at": item.submitted_at.isoformat(),
                "remaining": len(self._items),
            },
        )
        try:
            result = await item.operation()
        except asyncio.CancelledError:
            item.state = QueueItemState.FAILED
            self._counters.failed += 1
            item.future.cancel()
            raise
        except Exception as exc:
            item.state = QueueItemState.FAILED
            self._counters.failed += 1
            self._logger.error(
                "queue.task.failed",
                extra={"task_id": item.id, "label": item.label, "error": str(exc)},
            )
            if not item.future.done():
                item.future.set_exception(exc)
        else:
            item.state = QueueItemState.DONE
            self._counters.completed += 1
            self._logger.info(
                "queue.task.completed", extra={"task_id": item.id, "label": item.label}
            )
            if not item.future.done():
                item.future.set_result(result)
        finally:
            self._counters.in_progress -= 1

    async def join(self) -> None:
        """Wait until the queue has drained every submitted item."""

        while self._drain_task is not None:
            await asyncio.wait({self._drain_task})

    def stats(self) -> QueueStats:
        return QueueStats(
            total=self._counters.total,
            completed=self._counters.completed,
            failed=self._counters.failed,
            in_progress=self._counters.in_progress,
            queue_size=len(self._items),
            is_processing=self._draining,
            pending_tasks=[item.snapshot() for item in self._items],
        )

    def reset_stats(self) -> None:
        self._counters = QueueCounters(in_progress=self._counters.in_progress)
        self._logger.info("queue.stats.reset")

    def clear(self) -> int:
        """Drop pending items and reject their futures with ``QueueClearedError``.

        A running operation is left to finish; the drain loop then finds the
        queue empty and goes idle on its own.
        """

        dropped = list(self._items)
        self._items.clear()
        for item in dropped:
            if not item.future.done():
                item.future.set_exception(
                    QueueClearedError(f"Task '{item.label}' was removed from the queue")
                )
        self._logger.warning("queue.cleared", extra={"dropped": len(dropped)})
        return len(dropped)

    async def shutdown(self) -> None:
        """Clear pending work and stop the drain task."""

        self.clear()
        task = self._drain_task
        if task is not None:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._draining = False
        self._drain_task = None


__all__ = ["TaskQueue"]
