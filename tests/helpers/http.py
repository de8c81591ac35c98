from __future__ import annotations

from typing import Any

import httpx


class DummyResponse:
    def __init__(
        self,
        status_code: int,
        json_data: Any = None,
        text: str = "",
    ) -> None:
        self.status_code = status_code
        self._json_data = json_data
        self.text = text

    def json(self) -> Any:
        if self._json_data is None:
            raise ValueError("No JSON data")
        return self._json_data


class DummyAsyncClient:
    """Replays queued responses and records every request made."""

    def __init__(self, responses: list[DummyResponse | Exception] | None = None) -> None:
        self.responses = list(responses or [])
        self.requests: list[dict[str, Any]] = []

    async def __aenter__(self) -> "DummyAsyncClient":  # pragma: no cover - helper
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> None:  # pragma: no cover - helper
        return None

    def _next(self, method: str, url: str, **kwargs: Any) -> DummyResponse:
        self.requests.append({"method": method, "url": url, **kwargs})
        if not self.responses:
            raise RuntimeError(f"No response queued for {method} {url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    async def get(
        self, url: str, headers: dict[str, str] | None = None, params: dict[str, str] | None = None
    ) -> DummyResponse:
        return self._next("GET", url, headers=headers, params=params)

    async def patch(
        self, url: str, headers: dict[str, str] | None = None, json: Any = None
    ) -> DummyResponse:
        return self._next("PATCH", url, headers=headers, json=json)

    async def post(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        json: Any = None,
        data: dict[str, Any] | None = None,
        auth: tuple[str, str] | None = None,
    ) -> DummyResponse:
        return self._next("POST", url, headers=headers, json=json, data=data, auth=auth)


def connect_error(message: str = "connection refused") -> httpx.ConnectError:
    return httpx.ConnectError(message)
