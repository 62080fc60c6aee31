"""Status reporting for batch runs."""

import asyncio
import logging
from datetime import date, datetime
from typing import Iterable, Optional

from .models import JobStatus

logger = logging.getLogger(__name__)

# Order in which statuses are listed on the board.
DISPLAY_ORDER = [
    JobStatus.CRAWLING,
    JobStatus.SCRAPING,
    JobStatus.DONE,
    JobStatus.FAILED,
    JobStatus.PENDING,
]


class StatusBoard:
    """Per-source status for the date currently being generated."""

    def __init__(self):
        self.day: Optional[date] = None
        self._statuses: dict[str, JobStatus] = {}

    def reset(self, day: date, sources: Iterable[str]) -> None:
        self.day = day
        self._statuses = {key: JobStatus.PENDING for key in sources}

    def set(self, source: str, status: JobStatus) -> None:
        self._statuses[source] = status

    def get(self, source: str) -> Optional[JobStatus]:
        return self._statuses.get(source)

    def counts(self) -> dict[JobStatus, int]:
        counts = {status: 0 for status in JobStatus}
        for status in self._statuses.values():
            counts[status] += 1
        return counts

    def render(self, now: Optional[datetime] = None) -> str:
        """Text block listing every source, grouped by status."""
        if not self._statuses:
            return ""
        now = now or datetime.now()
        day = self.day.isoformat() if self.day else "?"
        title = f"  Current status for {day} ({now.strftime('%H:%M:%S')})"
        width = max(len(key) for key in self._statuses) + 2

        lines = ["-" * len(title), title]
        for status in DISPLAY_ORDER:
            for key, current in self._statuses.items():
                if current == status:
                    lines.append(f"  {key.ljust(width)}: {status.value}")
        lines.append("-" * len(title))
        return "\n".join(lines)


class StatusReporter:
    """Logs the status board on a fixed interval while a batch date runs."""

    def __init__(self, board: StatusBoard, interval_seconds: float):
        self.board = board
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    async def _run(self):
        while True:
            await asyncio.sleep(self.interval_seconds)
            self.report()

    def report(self) -> None:
        text = self.board.render()
        if text:
            logger.info("\n" + text)

    def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        self.report()
