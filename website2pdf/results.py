"""website2pdf.results: per-URL outcome tracking and the final summary."""

from __future__ import annotations

import enum
import json
import threading
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

from website2pdf.logger import logger

__all__ = ["ConversionStatus", "ConversionOutcome", "ConversionReport", "ResultTracker"]


class ConversionStatus(str, enum.Enum):
    PRINTED = "printed"
    ERRORED = "errored"


@dataclass(frozen=True, slots=True)
class ConversionOutcome:
    """Result of converting one URL."""

    url: str
    file_path: str
    status: ConversionStatus


@dataclass(slots=True)
class ConversionReport:
    """Summary of a run, built from the tracked outcomes."""

    outcomes: List[ConversionOutcome] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def printed(self) -> int:
        return sum(1 for o in self.outcomes if o.status is ConversionStatus.PRINTED)

    @property
    def errored(self) -> int:
        return self.total - self.printed

    @property
    def errored_outcomes(self) -> List[ConversionOutcome]:
        return [o for o in self.outcomes if o.status is ConversionStatus.ERRORED]

    def as_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "printed": self.printed,
            "errored": self.errored,
            "outcomes": [
                {**asdict(o), "status": o.status.value} for o in self.outcomes
            ],
        }

    def json(self, *, pretty: bool = False) -> str:
        """JSON representation of the report."""
        return json.dumps(self.as_dict(), ensure_ascii=False, indent=2 if pretty else None)


class ResultTracker:
    """Append-only outcome collection shared by every worker of a run."""

    def __init__(self) -> None:
        self._outcomes: List[ConversionOutcome] = []
        self._lock = threading.Lock()

    def store_result(self, url: str, file_path: str, status: ConversionStatus) -> None:
        outcome = ConversionOutcome(url=str(url), file_path=str(file_path), status=status)
        with self._lock:
            self._outcomes.append(outcome)

    @property
    def outcomes(self) -> List[ConversionOutcome]:
        with self._lock:
            return list(self._outcomes)

    def report(self) -> ConversionReport:
        return ConversionReport(outcomes=self.outcomes)

    def print_results(self) -> ConversionReport:
        """Log the run summary and return it."""
        report = self.report()
        logger.info(
            "Results: %d attempted, %d printed, %d errored",
            report.total,
            report.printed,
            report.errored,
        )
        for outcome in report.errored_outcomes:
            logger.error("Errored: %s -> %s", outcome.url, outcome.file_path)
        return report
