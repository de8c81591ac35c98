"""Routes for polling asynchronous jobs."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from .jobs_models import JobStatus
from .jobs_store import JobStore

router = APIRouter(prefix="/api", tags=["jobs"])


def get_job_store(request: Request) -> JobStore:
    try:
        return request.app.state.job_store  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("JobStore is not configured") from exc


@router.get("/job/{job_id}")
async def get_job(job_id: str, store: JobStore = Depends(get_job_store)) -> dict[str, Any]:
    """Return the current snapshot of a job."""
    job = store.get(job_id)
    if job is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"status": "error", "failure_reason": "job_not_found", "job_id": job_id},
        )
    return {"success": True, "data": job.to_dict()}


@router.get("/jobs/stats")
async def job_stats(store: JobStore = Depends(get_job_store)) -> dict[str, Any]:
    return {"success": True, "data": asdict(store.stats())}


@router.get("/jobs")
async def list_jobs(
    status_filter: JobStatus | None = Query(default=None, alias="status"),
    store: JobStore = Depends(get_job_store),
) -> dict[str, Any]:
    """List jobs in creation order, optionally filtered by status."""
    jobs = store.list(status_filter)
    return {"success": True, "count": len(jobs), "data": [job.to_dict() for job in jobs]}
