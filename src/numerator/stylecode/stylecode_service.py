"""Domain service for StyleCode assignment."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from ..jobs.jobs_models import JobStatus, JobType, StyleCodeAssignmentPayload
from ..jobs.jobs_store import JobStore
from ..plm.plm_client import RecordService
from ..queue.queue_service import TaskQueue
from .stylecode_allocator import allocate_style_code
from .stylecode_models import AssignmentResult, BatchItemResult, BatchResult

logger = logging.getLogger(__name__)

SKIP_REASON = "Style already has maximum sequence number"


def task_label(style_id: int) -> str:
    return f"StyleId: {style_id}"


@dataclass(slots=True)
class StyleCodeService:
    """Coordinates assignment through the serialized queue."""

    records: RecordService
    queue: TaskQueue
    jobs: JobStore
    log: logging.Logger = field(default_factory=lambda: logger)

    async def process_assignment(self, style_id: int) -> AssignmentResult:
        """Fetch, allocate, update and reindex one style.

        Must only run inside the queue: the allocation reads the partition and
        writes the next sequence without any locking of its own.
        """

        self.log.info("stylecode.assignment.start", extra={"style_id": style_id})
        try:
            style = await self.records.fetch_style(style_id)
            peers = await self.records.fetch_similar_styles(style.season.id, style.category.id)
            allocation = allocate_style_code(style, peers)

            if allocation is None:
                self.log.info(
                    "stylecode.assignment.skipped",
                    extra={"style_id": style_id, "style_code": style.style_code},
                )
                return AssignmentResult(
                    style_id=style_id,
                    skipped=True,
                    reason=SKIP_REASON,
                    old_style_code=style.style_code,
                    brand=style.brand,
                    season=style.season,
                    product_sub_sub_category=style.category,
                    similar_styles_count=len(peers),
                )

            await self.records.update_style(
                style_id, allocation.style_code, allocation.pattern_spec_number
            )
            synced = await self.records.sync_to_search_data(style_id)
        except Exception as exc:
            self.log.error(
                "stylecode.assignment.failed", extra={"style_id": style_id, "error": str(exc)}
            )
            raise

        self.log.info(
            "stylecode.assignment.completed",
            extra={
                "style_id": style_id,
                "old_style_code": style.style_code,
                "new_style_code": allocation.style_code,
                "synced": synced,
            },
        )
        return AssignmentResult(
            style_id=style_id,
            skipped=False,
            old_style_code=style.style_code,
            new_style_code=allocation.style_code,
            pattern_spec_number=allocation.pattern_spec_number,
            brand=style.brand,
            season=style.season,
            product_sub_sub_category=style.category,
            similar_styles_count=len(peers),
            synced_to_search_data=synced,
        )

    async def assign(self, style_id: int) -> AssignmentResult:
        """Queue an assignment and wait for its result."""

        return await self.queue.submit(
            lambda: self.process_assignment(style_id), task_label(style_id)
        )

    def assign_async(self, style_id: int) -> str:
        """Queue an assignment tracked by a job and return the job id at once."""

        job_id = self.jobs.create(
            JobType.STYLECODE_ASSIGNMENT, StyleCodeAssignmentPayload(style_id=style_id)
        )

        async def run_job() -> AssignmentResult:
            self.jobs.update(job_id, JobStatus.PROCESSING)
            try:
                result = await self.process_assignment(style_id)
            except Exception as exc:
                self.jobs.update(job_id, JobStatus.FAILED, error=str(exc))
                raise
            self.jobs.update(job_id, JobStatus.COMPLETED, result=result)
            return result

        future = self.queue.submit(run_job, task_label(style_id))
        future.add_done_callback(lambda done: self._on_job_settled(job_id, done))
        return job_id

    def _on_job_settled(self, job_id: str, future: asyncio.Future) -> None:
        if future.cancelled():
            error = "Job was cancelled"
        else:
            exc = future.exception()
            if exc is None:
                return
            error = str(exc)
        # Jobs dropped by clear() or shutdown never ran, so nothing marked them failed.
        view = self.jobs.get(job_id)
        if view is not None and not view.status.is_terminal:
            self.log.warning("stylecode.job.dropped", extra={"job_id": job_id, "error": error})
            self.jobs.update(job_id, JobStatus.FAILED, error=error)

    async def assign_batch(self, style_ids: Sequence[int]) -> BatchResult:
        """Queue every style in order; each failure is kept to its own entry."""

        futures = [
            self.queue.submit(
                lambda style_id=style_id: self.process_assignment(style_id),
                task_label(style_id),
            )
            for style_id in style_ids
        ]
        outcomes = await asyncio.gather(*futures, return_exceptions=True)

        items: list[BatchItemResult] = []
        for style_id, outcome in zip(style_ids, outcomes):
            if isinstance(outcome, BaseException):
                items.append(BatchItemResult(style_id=style_id, success=False, error=str(outcome)))
            else:
                items.append(BatchItemResult(style_id=style_id, success=True, result=outcome))
        batch = BatchResult(items=items)
        self.log.info(
            "stylecode.batch.completed",
            extra={"total": len(items), "succeeded": batch.succeeded, "failed": batch.failed},
        )
        return batch


__all__ = ["StyleCodeService", "SKIP_REASON", "task_label"]
