from __future__ import annotations

from typing import Any

from fastapi import FastAPI
from fastapi.testclient import TestClient

from numerator.auth.token_api import router
from numerator.exceptions import TokenAcquisitionError


class DummyTokenService:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.refreshed = 0

    def token_info(self) -> dict[str, Any]:
        return {"has_token": self.refreshed > 0, "is_valid": self.refreshed > 0}

    def config_info(self) -> dict[str, Any]:
        return {"tenant_id": "TENANT_TST"}

    async def refresh(self) -> str:
        if self.fail:
            raise TokenAcquisitionError("Failed to acquire access token: HTTP 401")
        self.refreshed += 1
        return "tok"


def build_client(service: DummyTokenService) -> TestClient:
    app = FastAPI()
    app.include_router(router)
    app.state.token_service = service
    return TestClient(app)


def test_info_returns_token_and_config() -> None:
    client = build_client(DummyTokenService())

    response = client.get("/api/token/info")

    assert response.status_code == 200
    assert response.json()["data"] == {
        "token": {"has_token": False, "is_valid": False},
        "config": {"tenant_id": "TENANT_TST"},
    }


def test_refresh_returns_new_token_info() -> None:
    service = DummyTokenService()
    client = build_client(service)

    response = client.post("/api/token/refresh")

    assert response.status_code == 200
    assert response.json()["data"]["has_token"] is True
    assert service.refreshed == 1


def test_refresh_failure_returns_502() -> None:
    client = build_client(DummyTokenService(fail=True))

    response = client.post("/api/token/refresh")

    assert response.status_code == 502
    assert response.json()["detail"]["failure_reason"] == "token_error"
