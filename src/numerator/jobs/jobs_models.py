"""Data structures for caller-visible job tracking."""

from __future__ import annotations

from dataclasses import asdict, dataclass, is_dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any


class JobStatus(StrEnum):
    """Lifecycle statuses reported to polling clients."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.COMPLETED, JobStatus.FAILED)


class JobType(StrEnum):
    STYLECODE_ASSIGNMENT = "stylecode_assignment"


@dataclass(slots=True, frozen=True)
class StyleCodeAssignmentPayload:
    style_id: int


JobPayload = StyleCodeAssignmentPayload

PAYLOAD_TYPES: dict[JobType, type] = {
    JobType.STYLECODE_ASSIGNMENT: StyleCodeAssignmentPayload,
}


@dataclass(slots=True)
class Job:
    id: str
    type: JobType
    payload: JobPayload
    created_at: datetime
    status: JobStatus = JobStatus.PENDING
    started_at: datetime | None = None
    completed_at: datetime | None = None
    result: Any = None
    error: str | None = None


@dataclass(slots=True, frozen=True)
class JobView:
    """Snapshot of a job with its computed duration."""

    id: str
    type: JobType
    payload: JobPayload
    status: JobStatus
    created_at: datetime
    started_at: datetime | None
    completed_at: datetime | None
    result: Any
    error: str | None
    duration_ms: int | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "payload": asdict(self.payload),
            "status": self.status.value,
            "created_at": self.created_at.isoformat(),
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "result": _serialize(self.result),
            "error": self.error,
            "duration_ms": self.duration_ms,
        }


@dataclass(slots=True, frozen=True)
class JobStats:
    total: int
    pending: int
    processing: int
    completed: int
    failed: int


def _serialize(value: Any) -> Any:
    if value is None:
        return None
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    return value
