"""Infor ION OAuth2 token acquisition and caching."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Protocol

import httpx
import structlog

from ..config import IonCredentials, PlmSettings
from ..exceptions import TokenAcquisitionError

logger = structlog.get_logger(__name__)

DEFAULT_EXPIRES_IN = 3600


class TokenProvider(Protocol):
    async def get_authorization_header(self) -> str:
        """Return the value for the ``Authorization`` header."""


@dataclass(slots=True)
class CachedToken:
    access_token: str
    token_type: str
    expires_at: float


def _isoformat(epoch: float) -> str:
    return datetime.fromtimestamp(epoch, tz=timezone.utc).isoformat()


class TokenService:
    """Fetch tokens with the password grant and reuse them until near expiry."""

    def __init__(
        self,
        *,
        credentials: IonCredentials,
        plm: PlmSettings,
        expiry_buffer_seconds: int = 300,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._credentials = credentials
        self._plm = plm
        self._buffer = max(0, expiry_buffer_seconds)
        self._clock = clock or time.time
        self._token: CachedToken | None = None
        self._lock = asyncio.Lock()

    @property
    def token_url(self) -> str:
        return f"{self._plm.provider_url}{self._plm.endpoints.token}"

    @property
    def revoke_url(self) -> str:
        return f"{self._plm.provider_url}{self._plm.endpoints.revoke}"

    def is_token_valid(self) -> bool:
        if self._token is None:
            return False
        return self._clock() < self._token.expires_at - self._buffer

    async def get_access_token(self) -> str:
        token = await self._current_token()
        return token.access_token

    async def get_authorization_header(self) -> str:
        token = await self._current_token()
        return f"{token.token_type} {token.access_token}"

    async def _current_token(self) -> CachedToken:
        if self._token is not None and self.is_token_valid():
            return self._token
        async with self._lock:
            if self._token is not None and self.is_token_valid():
                return self._token
            return await self._fetch_new_token()

    async def _fetch_new_token(self) -> CachedToken:
        logger.info("token.fetch.start", token_url=self.token_url, client_id=self._credentials.client_id)
        form = {
            "grant_type": "password",
            "username": self._credentials.service_account_access_key,
            "password": self._credentials.service_account_secret_key,
        }
        try:
            async with httpx.AsyncClient(timeout=self._plm.request_timeout_seconds) as client:
                response = await client.post(
                    self.token_url,
                    data=form,
                    auth=(self._credentials.client_id, self._credentials.client_secret),
                )
        except httpx.HTTPError as exc:
            logger.error("token.fetch.transport_error", error=str(exc))
            raise TokenAcquisitionError(f"Failed to acquire access token: {exc}") from exc

        if response.status_code != 200:
            logger.error(
                "token.fetch.failed", status_code=response.status_code, body=response.text
            )
            raise TokenAcquisitionError(
                f"Failed to acquire access token: HTTP {response.status_code}"
            )

        body: dict[str, Any] = response.json()
        access_token = body.get("access_token")
        if not access_token:
            raise TokenAcquisitionError(
                "Failed to acquire access token: access_token not found in response"
            )

        expires_in = int(body.get("expires_in") or DEFAULT_EXPIRES_IN)
        token = CachedToken(
            access_token=access_token,
            token_type=body.get("token_type") or "Bearer",
            expires_at=self._clock() + expires_in,
        )
        self._token = token
        logger.info(
            "token.fetch.success",
            token_type=token.token_type,
            expires_in=expires_in,
            expires_at=_isoformat(token.expires_at),
        )
        return token

    async def revoke(self) -> None:
        if self._token is None:
            logger.info("token.revoke.skipped", reason="no_token")
            return
        try:
            async with httpx.AsyncClient(timeout=self._plm.request_timeout_seconds) as client:
                response = await client.post(
                    self.revoke_url,
                    data={"token": self._token.access_token},
                    auth=(self._credentials.client_id, self._credentials.client_secret),
                )
        except httpx.HTTPError as exc:
            raise TokenAcquisitionError(f"Failed to revoke token: {exc}") from exc
        if response.status_code >= 400:
            raise TokenAcquisitionError(f"Failed to revoke token: HTTP {response.status_code}")
        self._token = None
        logger.info("token.revoke.success")

    async def refresh(self) -> str:
        """Revoke the cached token (best effort) and fetch a new one."""

        logger.info("token.refresh.start")
        if self._token is not None:
            try:
                await self.revoke()
            except TokenAcquisitionError as exc:
                logger.warning("token.refresh.revoke_failed", error=str(exc))
        self._token = None
        return await self.get_access_token()

    def token_info(self) -> dict[str, Any]:
        info: dict[str, Any] = {
            "environment": self._plm.environment,
            "tenant_id": self._credentials.tenant_id,
            "client_name": self._credentials.client_name,
            "has_token": self._token is not None,
            "is_valid": self.is_token_valid(),
            "expiry_time": _isoformat(self._token.expires_at) if self._token else None,
            "token_type": self._token.token_type if self._token else None,
        }
        if self._token is not None:
            remaining = int(self._token.expires_at - self._clock())
            info["remaining_time"] = {
                "seconds": remaining,
                "minutes": remaining // 60,
                "hours": remaining // 3600,
            }
        return info

    def config_info(self) -> dict[str, Any]:
        endpoints = self._plm.endpoints
        return {
            "environment": self._plm.environment,
            "tenant_id": self._credentials.tenant_id,
            "client_name": self._credentials.client_name,
            "ion_api_url": self._plm.ion_api_url,
            "provider_url": self._plm.provider_url,
            "endpoints": {
                "authorization": endpoints.authorization,
                "token": endpoints.token,
                "revoke": endpoints.revoke,
            },
        }


__all__ = ["CachedToken", "TokenProvider", "TokenService"]
