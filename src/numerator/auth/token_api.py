"""Token diagnostics endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, status

from ..exceptions import TokenAcquisitionError
from .token_service import TokenService

router = APIRouter(prefix="/api/token", tags=["token"])


def get_token_service(request: Request) -> TokenService:
    try:
        return request.app.state.token_service  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("TokenService is not configured") from exc


@router.get("/info")
async def token_info(service: TokenService = Depends(get_token_service)) -> dict[str, Any]:
    return {
        "success": True,
        "data": {"token": service.token_info(), "config": service.config_info()},
    }


@router.post("/refresh")
async def refresh_token(service: TokenService = Depends(get_token_service)) -> dict[str, Any]:
    """Revoke the cached token and fetch a new one."""
    try:
        await service.refresh()
    except TokenAcquisitionError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"status": "error", "failure_reason": "token_error", "message": str(exc)},
        ) from exc
    return {
        "success": True,
        "message": "Token refreshed successfully",
        "data": service.token_info(),
    }
