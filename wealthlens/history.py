from __future__ import annotations

from collections import deque
from typing import Optional

from .engine.constants import HISTORY_MAX_REPORTS
from .engine.models import AnalysisReport


class ReportHistory:
    """Most recent reports, oldest first. Appending past capacity drops the oldest."""

    def __init__(self, max_reports: int = HISTORY_MAX_REPORTS, reports=()):
        if max_reports < 1:
            raise ValueError("max_reports must be >= 1")
        self.max_reports = int(max_reports)
        self._reports: deque[AnalysisReport] = deque(reports, maxlen=self.max_reports)

    def append(self, report: AnalysisReport) -> Optional[AnalysisReport]:
        """Add report; return the one evicted to make room, if any."""
        evicted = self._reports[0] if len(self._reports) == self.max_reports else None
        self._reports.append(report)
        return evicted

    def latest(self) -> Optional[AnalysisReport]:
        return self._reports[-1] if self._reports else None

    def items(self) -> list[AnalysisReport]:
        return list(self._reports)

    def __len__(self) -> int:
        return len(self._reports)

    def __iter__(self):
        return iter(list(self._reports))
