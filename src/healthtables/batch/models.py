"""Data models for batch generation."""

from datetime import date
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class JobStatus(str, Enum):
    """Progress of one source within a batch date."""

    PENDING = "pending"
    CRAWLING = "crawling"
    SCRAPING = "scraping"
    DONE = "done"
    FAILED = "failed"


class JobResult(BaseModel):
    """Outcome of crawling and scraping one source for one date."""

    source: str
    date: date
    status: JobStatus
    locations: list[dict[str, Any]] = Field(default_factory=list)
    error: Optional[str] = None
    duration_ms: float = 0.0


class BatchResult(BaseModel):
    """Every job result of a batch run, grouped by date."""

    results: dict[date, list[JobResult]] = Field(default_factory=dict)

    def add(self, result: JobResult) -> None:
        self.results.setdefault(result.date, []).append(result)

    @property
    def failed(self) -> list[JobResult]:
        return [r for day in self.results.values() for r in day if r.status == JobStatus.FAILED]

    @property
    def succeeded(self) -> list[JobResult]:
        return [r for day in self.results.values() for r in day if r.status == JobStatus.DONE]
