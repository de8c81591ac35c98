"""In-memory registry of asynchronous assignment jobs."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from .jobs_models import (
    PAYLOAD_TYPES,
    Job,
    JobPayload,
    JobStats,
    JobStatus,
    JobType,
    JobView,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_HISTORY = 1000


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JobStore:
    """Track job lifecycle for poll-based status retrieval.

    Jobs are kept in creation order. Once the store grows past
    ``max_history`` the oldest terminal jobs are evicted; pending and
    processing jobs always stay, even if that leaves the store over the cap.
    """

    def __init__(
        self,
        *,
        max_history: int = DEFAULT_MAX_HISTORY,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if max_history < 1:
            raise ValueError("max_history must be positive")
        self._jobs: dict[str, Job] = {}
        self._max_history = max_history
        self._clock = clock or _utcnow

    def __len__(self) -> int:
        return len(self._jobs)

    def create(self, job_type: JobType, payload: JobPayload) -> str:
        expected = PAYLOAD_TYPES[job_type]
        if not isinstance(payload, expected):
            raise TypeError(
                f"{job_type.value} jobs require {expected.__name__}, got {type(payload).__name__}"
            )
        job_id = f"job_{uuid4().hex}"
        self._jobs[job_id] = Job(
            id=job_id,
            type=job_type,
            payload=payload,
            created_at=self._clock(),
        )
        if len(self._jobs) > self._max_history:
            self._evict()
        logger.info("jobs.created", extra={"job_id": job_id, "job_type": job_type.value})
        return job_id

    def update(
        self,
        job_id: str,
        status: JobStatus,
        *,
        result: Any = None,
        error: str | None = None,
    ) -> None:
        """Move a job to ``status``; unknown or finished jobs are left untouched."""

        job = self._jobs.get(job_id)
        if job is None:
            logger.warning("jobs.update.not_found", extra={"job_id": job_id})
            return
        if job.status.is_terminal:
            logger.warning(
                "jobs.update.already_terminal",
                extra={"job_id": job_id, "status": job.status.value, "requested": status.value},
            )
            return

        now = self._clock()
        job.status = status
        if status is JobStatus.PROCESSING and job.started_at is None:
            job.started_at = now
        if status.is_terminal:
            job.completed_at = now
            if status is JobStatus.COMPLETED:
                job.result = result
            else:
                job.error = error or "Unknown error"
        logger.info("jobs.updated", extra={"job_id": job_id, "status": status.value})

    def get(self, job_id: str) -> JobView | None:
        job = self._jobs.get(job_id)
        if job is None:
            return None
        return self._view(job)

    def list(self, status: JobStatus | None = None) -> list[JobView]:
        return [
            self._view(job)
            for job in self._jobs.values()
            if status is None or job.status is status
        ]

    def stats(self) -> JobStats:
        counts = {status: 0 for status in JobStatus}
        for job in self._jobs.values():
            counts[job.status] += 1
        return JobStats(
            total=len(self._jobs),
            pending=counts[JobStatus.PENDING],
            processing=counts[JobStatus.PROCESSING],
            completed=counts[JobStatus.COMPLETED],
            failed=counts[JobStatus.FAILED],
        )

    def clear(self) -> None:
        self._jobs.clear()
        logger.info("jobs.cleared")

    def _evict(self) -> None:
        excess = len(self._jobs) - self._max_history
        evicted: list[str] = []
        for job_id, job in self._jobs.items():
            if len(evicted) >= excess:
                break
            if job.status.is_terminal:
                evicted.append(job_id)
        for job_id in evicted:
            del self._jobs[job_id]
            logger.info("jobs.evicted", extra={"job_id": job_id})

    def _view(self, job: Job) -> JobView:
        duration_ms: int | None = None
        if job.started_at is not None:
            end = job.completed_at or self._clock()
            duration_ms = int((end - job.started_at).total_seconds() * 1000)
        return JobView(
            id=job.id,
            type=job.type,
            payload=job.payload,
            status=job.status,
            created_at=job.created_at,
            started_at=job.started_at,
            completed_at=job.completed_at,
            result=job.result,
            error=job.error,
            duration_ms=duration_ms,
        )


__all__ = ["JobStore", "DEFAULT_MAX_HISTORY"]
