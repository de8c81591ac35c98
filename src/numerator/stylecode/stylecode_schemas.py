"""Pydantic schemas for StyleCode requests and responses."""

from pydantic import BaseModel, ConfigDict, Field


class AssignRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    style_id: int | str | None = Field(default=None, alias="styleId")


class BatchAssignRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    style_ids: list[int | str] | None = Field(default=None, alias="styleIds")


class PollingHints(BaseModel):
    recommended_interval: str = "2s"
    max_wait_time: str = "60s"


class AsyncAssignResponse(BaseModel):
    success: bool = True
    message: str = "StyleCode assignment job created"
    job_id: str
    status_url: str
    polling: PollingHints = Field(default_factory=PollingHints)

