"""HTTP routes for StyleCode assignment."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, status

from ..exceptions import (
    InvalidRequestError,
    NotFoundError,
    PlmRequestError,
    QueueClearedError,
    StyleDataError,
    UpstreamError,
    ensure_style_id,
)
from .stylecode_models import BatchItemResult, BatchResult
from .stylecode_schemas import AssignRequest, AsyncAssignResponse, BatchAssignRequest
from .stylecode_service import StyleCodeService

router = APIRouter(prefix="/api/stylecode", tags=["stylecode"])
logger = logging.getLogger(__name__)


def get_stylecode_service(request: Request) -> StyleCodeService:
    """Fetch StyleCode service from application state."""
    try:
        return request.app.state.stylecode_service  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("StyleCodeService is not configured") from exc


def _invalid_request(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"status": "error", "failure_reason": "invalid_request", "message": message},
    )


def _to_http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, StyleDataError):
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"status": "error", "failure_reason": "invalid_style_data", "message": str(exc)},
        )
    if isinstance(exc, NotFoundError):
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"status": "error", "failure_reason": "style_not_found", "message": str(exc)},
        )
    if isinstance(exc, UpstreamError):
        details = exc.details if isinstance(exc, PlmRequestError) else None
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={
                "status": "error",
                "failure_reason": "upstream_error",
                "message": str(exc),
                "details": details,
            },
        )
    if isinstance(exc, QueueClearedError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"status": "error", "failure_reason": "queue_cleared", "message": str(exc)},
        )
    logger.error("stylecode.unexpected_error", exc_info=exc)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"status": "error", "failure_reason": "internal_error", "message": str(exc)},
    )


@router.post("/assign")
async def assign_style_code(
    payload: AssignRequest,
    service: StyleCodeService = Depends(get_stylecode_service),
) -> dict[str, Any]:
    """Assign a StyleCode and wait for the queued task to finish."""
    try:
        style_id = ensure_style_id(payload.style_id)
    except InvalidRequestError as exc:
        raise _invalid_request(str(exc)) from exc

    logger.info("stylecode.request.sync", extra={"style_id": style_id})
    try:
        result = await service.assign(style_id)
    except Exception as exc:
        raise _to_http_error(exc) from exc
    return {
        "success": True,
        "message": "StyleCode assigned successfully",
        "data": result.to_dict(),
    }


@router.post("/assign/async", response_model=AsyncAssignResponse)
async def assign_style_code_async(
    payload: AssignRequest,
    service: StyleCodeService = Depends(get_stylecode_service),
) -> AsyncAssignResponse:
    """Create a tracked job and return immediately; clients poll the job."""
    try:
        style_id = ensure_style_id(payload.style_id)
    except InvalidRequestError as exc:
        raise _invalid_request(str(exc)) from exc

    logger.info("stylecode.request.async", extra={"style_id": style_id})
    job_id = service.assign_async(style_id)
    return AsyncAssignResponse(
        job_id=job_id,
        status_url=f"/api/job/{job_id}",
    )


@router.post("/assign/batch")
async def assign_style_code_batch(
    payload: BatchAssignRequest,
    service: StyleCodeService = Depends(get_stylecode_service),
) -> dict[str, Any]:
    """Queue several styles in order and report a per-style outcome."""
    if not payload.style_ids:
        raise _invalid_request("Missing or invalid field: styleIds (must be non-empty array)")

    checked: list[int | InvalidRequestError] = []
    for value in payload.style_ids:
        try:
            checked.append(ensure_style_id(value))
        except InvalidRequestError as exc:
            checked.append(exc)
    valid_ids = [entry for entry in checked if isinstance(entry, int)]

    logger.info(
        "stylecode.request.batch",
        extra={"count": len(checked), "invalid": len(checked) - len(valid_ids)},
    )
    queued = iter((await service.assign_batch(valid_ids)).items if valid_ids else [])

    # Rejected ids are never enqueued but keep their slot in the response.
    items: list[BatchItemResult] = []
    for value, entry in zip(payload.style_ids, checked):
        if isinstance(entry, int):
            items.append(next(queued))
        else:
            items.append(BatchItemResult(style_id=value, success=False, error=str(entry)))
    batch = BatchResult(items=items)
    return {
        "success": True,
        "message": (
            f"Batch processing completed: {batch.succeeded} succeeded, {batch.failed} failed"
        ),
        "summary": {
            "total": len(batch.items),
            "succeeded": batch.succeeded,
            "failed": batch.failed,
        },
        "results": [item.to_dict() for item in batch.items],
    }
