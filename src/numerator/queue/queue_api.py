"""Routes for queue diagnostics and administration."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request

from .queue_service import TaskQueue

router = APIRouter(prefix="/api/queue", tags=["queue"])


def get_task_queue(request: Request) -> TaskQueue:
    try:
        return request.app.state.task_queue  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("TaskQueue is not configured") from exc


@router.get("/stats")
async def queue_stats(queue: TaskQueue = Depends(get_task_queue)) -> dict[str, Any]:
    return {"success": True, "data": queue.stats().to_dict()}


@router.post("/clear")
async def clear_queue(queue: TaskQueue = Depends(get_task_queue)) -> dict[str, Any]:
    """Drop pending tasks; their callers receive a queue_cleared error."""
    dropped = queue.clear()
    return {"success": True, "message": "Queue cleared", "dropped": dropped}


@router.post("/reset-stats")
async def reset_queue_stats(queue: TaskQueue = Depends(get_task_queue)) -> dict[str, Any]:
    queue.reset_stats()
    return {"success": True, "message": "Statistics reset"}
