"""Caller-visible job tracking for asynchronous assignments."""

from .jobs_models import Job, JobStats, JobStatus, JobType, JobView, StyleCodeAssignmentPayload
from .jobs_store import JobStore

__all__ = [
    "Job",
    "JobStats",
    "JobStatus",
    "JobStore",
    "JobType",
    "JobView",
    "StyleCodeAssignmentPayload",
]
