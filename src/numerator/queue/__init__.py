"""Serialized FIFO execution of StyleCode assignments."""

from .queue_service import TaskQueue

__all__ = ["TaskQueue"]
