"""Dependency wiring helpers."""

from fastapi import FastAPI

from .auth.token_api import router as token_router
from .auth.token_service import TokenService
from .config import AppConfig
from .health_api import router as health_router
from .jobs.jobs_api import router as jobs_router
from .jobs.jobs_store import JobStore
from .plm.plm_client import PlmClient
from .queue.queue_api import router as queue_router
from .queue.queue_service import TaskQueue
from .stylecode.stylecode_api import router as stylecode_router
from .stylecode.stylecode_service import StyleCodeService


def include_routers(app: FastAPI, config: AppConfig) -> None:
    """Build services, attach them to app state and mount routers."""
    token_service = TokenService(
        credentials=config.credentials,
        plm=config.plm,
        expiry_buffer_seconds=config.token_expiry_buffer_seconds,
    )
    plm_client = PlmClient(
        token_provider=token_service,
        odata_url=config.plm.odata_url,
        job_url=config.plm.job_url,
        search_schema=config.plm.search_schema,
        timeout_seconds=config.plm.request_timeout_seconds,
    )
    task_queue = TaskQueue()
    job_store = JobStore(max_history=config.job_history_limit)
    stylecode_service = StyleCodeService(
        records=plm_client,
        queue=task_queue,
        jobs=job_store,
    )

    app.state.config = config
    app.state.token_service = token_service
    app.state.plm_client = plm_client
    app.state.task_queue = task_queue
    app.state.job_store = job_store
    app.state.stylecode_service = stylecode_service

    app.include_router(health_router)
    app.include_router(stylecode_router)
    app.include_router(jobs_router)
    app.include_router(queue_router)
    app.include_router(token_router)
