"""Service health and endpoint catalogue."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request

from . import __version__

router = APIRouter(tags=["health"])

ENDPOINTS = {
    "health": "GET /",
    "assign_style_code": "POST /api/stylecode/assign",
    "assign_style_code_async": "POST /api/stylecode/assign/async",
    "assign_style_code_batch": "POST /api/stylecode/assign/batch",
    "job_status": "GET /api/job/{job_id}",
    "jobs": "GET /api/jobs",
    "job_stats": "GET /api/jobs/stats",
    "queue_stats": "GET /api/queue/stats",
    "queue_clear": "POST /api/queue/clear",
    "queue_reset_stats": "POST /api/queue/reset-stats",
    "token_info": "GET /api/token/info",
    "token_refresh": "POST /api/token/refresh",
}


@router.get("/")
async def health(request: Request) -> dict[str, Any]:
    config = request.app.state.config
    return {
        "service": "StyleCode Numerator API",
        "version": __version__,
        "status": "running",
        "environment": config.plm.environment,
        "tenant": config.credentials.tenant_id,
        "endpoints": ENDPOINTS,
    }
