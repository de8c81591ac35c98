from __future__ import annotations

import time

import pytest
from fastapi.testclient import TestClient

from numerator.jobs.jobs_store import JobStore
from numerator.main import create_app
from numerator.queue.queue_service import TaskQueue
from numerator.stylecode.stylecode_service import StyleCodeService
from tests.helpers.config import make_config
from tests.helpers.styles import PREFIX, make_style
from tests.mocks.plm import InMemoryRecordService

pytestmark = pytest.mark.integration


def build_app(records: InMemoryRecordService):
    app = create_app(make_config())
    app.state.stylecode_service.records = records
    return app


def poll_job(client: TestClient, job_id: str) -> dict:
    for _ in range(100):
        data = client.get(f"/api/job/{job_id}").json()["data"]
        if data["status"] in ("completed", "failed"):
            return data
        time.sleep(0.02)
    raise AssertionError(f"job {job_id} did not finish")


def test_services_are_wired_on_app_state() -> None:
    app = create_app(make_config(job_history_limit=25))

    assert isinstance(app.state.task_queue, TaskQueue)
    assert isinstance(app.state.job_store, JobStore)
    assert isinstance(app.state.stylecode_service, StyleCodeService)
    assert app.state.stylecode_service.queue is app.state.task_queue
    assert app.state.stylecode_service.records is app.state.plm_client


def test_health_lists_endpoints() -> None:
    with TestClient(create_app(make_config())) as client:
        response = client.get("/")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "running"
    assert body["environment"] == "TEST"
    assert body["tenant"] == "TENANT_TST"
    assert body["endpoints"]["assign_style_code"] == "POST /api/stylecode/assign"


def test_sync_then_async_assignment_flow() -> None:
    records = InMemoryRecordService(
        [make_style(1, f"{PREFIX}001"), make_style(2, None), make_style(3, None)]
    )
    with TestClient(build_app(records)) as client:
        sync = client.post("/api/stylecode/assign", json={"styleId": 2})
        assert sync.status_code == 200
        assert sync.json()["data"]["new_style_code"] == f"{PREFIX}002"

        created = client.post("/api/stylecode/assign/async", json={"styleId": "3"})
        assert created.status_code == 200
        job = poll_job(client, created.json()["job_id"])

        assert job["status"] == "completed"
        assert job["result"]["new_style_code"] == f"{PREFIX}003"
        assert job["duration_ms"] is not None

        stats = client.get("/api/queue/stats").json()["data"]
        assert stats["completed"] == 2
        assert stats["queue_size"] == 0

        job_stats = client.get("/api/jobs/stats").json()["data"]
        assert job_stats["completed"] == 1


def test_missing_style_returns_404_through_app() -> None:
    with TestClient(build_app(InMemoryRecordService())) as client:
        response = client.post("/api/stylecode/assign", json={"styleId": 99})

    assert response.status_code == 404
    assert response.json()["detail"]["failure_reason"] == "style_not_found"


def test_batch_through_app() -> None:
    records = InMemoryRecordService([make_style(1, None), make_style(2, None)])
    with TestClient(build_app(records)) as client:
        response = client.post("/api/stylecode/assign/batch", json={"styleIds": [2, 1, 5]})

    body = response.json()
    assert body["summary"] == {"total": 3, "succeeded": 2, "failed": 1}
    assert [item["style_id"] for item in body["results"]] == [2, 1, 5]
    assert body["results"][0]["new_style_code"] == f"{PREFIX}001"
    assert body["results"][1]["new_style_code"] == f"{PREFIX}002"
