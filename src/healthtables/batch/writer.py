"""Serialization of batch results to flat files."""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Optional

from ..config import settings
from .models import BatchResult, JobResult, JobStatus

logger = logging.getLogger(__name__)


class ResultWriter:
    """Writes per-date location and report files."""

    def __init__(self, output_dir: Optional[Path] = None):
        self.output_dir = Path(output_dir or settings.output_dir)

    def locations_path(self, day: date) -> Path:
        return self.output_dir / f"locations-{day.isoformat()}.json"

    def report_path(self, day: date) -> Path:
        return self.output_dir / f"report-{day.isoformat()}.json"

    def write(self, batch: BatchResult) -> list[Path]:
        """Write every date of a batch; returns the files written."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        written = []
        for day, results in sorted(batch.results.items()):
            written.append(self._write_json(self.locations_path(day), self.locations(results)))
            written.append(self._write_json(self.report_path(day), self.report(results)))
        return written

    @staticmethod
    def locations(results: list[JobResult]) -> list[dict]:
        """Locations of successful jobs, tagged with their source and date."""
        rows = []
        for result in results:
            if result.status != JobStatus.DONE:
                continue
            for location in result.locations:
                rows.append({**location, "source": result.source, "date": result.date.isoformat()})
        return rows

    @staticmethod
    def report(results: list[JobResult]) -> dict:
        return {
            result.source: {
                "status": result.status.value,
                "locations": len(result.locations),
                "error": result.error,
                "duration_ms": round(result.duration_ms, 1),
            }
            for result in results
        }

    def _write_json(self, path: Path, data) -> Path:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, default=str)
        logger.info(f"Wrote {path}")
        return path
