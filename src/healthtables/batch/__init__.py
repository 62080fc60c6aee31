"""Batch generation across sources and dates."""

from .models import JobStatus, JobResult, BatchResult
from .status import StatusBoard, StatusReporter
from .runner import BatchRunner, get_dates
from .writer import ResultWriter

__all__ = [
    "JobStatus",
    "JobResult",
    "BatchResult",
    "StatusBoard",
    "StatusReporter",
    "BatchRunner",
    "get_dates",
    "ResultWriter",
]
