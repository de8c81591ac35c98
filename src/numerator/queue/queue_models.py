"""Data structures for the serialized task queue."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any

Operation = Callable[[], Awaitable[Any]]


class QueueItemState(StrEnum):
    """Lifecycle of a single queued task."""

    PENDING = "pending"
    RUNNING = "running"
    DONE = "done"
    FAILED = "failed"


@dataclass(slots=True)
class QueueItem:
    """One submitted unit of work and the future handed back to its caller."""

    id: str
    label: str
    operation: Operation
    future: asyncio.Future[Any]
    submitted_at: datetime
    state: QueueItemState = QueueItemState.PENDING

    def snapshot(self) -> "PendingTask":
        return PendingTask(
            id=self.id,
            label=self.label,
            submitted_at=self.submitted_at,
            state=self.state,
        )


@dataclass(slots=True, frozen=True)
class PendingTask:
    id: str
    label: str
    submitted_at: datetime
    state: QueueItemState


@dataclass(slots=True)
class QueueCounters:
    total: int = 0
    completed: int = 0
    failed: int = 0
    in_progress: int = 0


@dataclass(slots=True, frozen=True)
class QueueStats:
    """Read-only diagnostics view of the queue."""

    total: int
    completed: int
    failed: int
    in_progress: int
    queue_size: int
    is_processing: bool
    pending_tasks: list[PendingTask] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "completed": self.completed,
            "failed": self.failed,
            "in_progress": self.in_progress,
            "queue_size": self.queue_size,
            "is_processing": self.is_processing,
            "pending_tasks": [
                {
                    "id": task.id,
                    "label": task.label,
                    "submitted_at": task.submitted_at.isoformat(),
                    "state": task.state.value,
                }
                for task in self.pending_tasks
            ],
        }
