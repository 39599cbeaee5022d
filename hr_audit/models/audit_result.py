from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .evaluated_record import EvaluatedRecord
from .manager_batch import ManagerBatch

"""Result models for one audit run.

AuditResult is what the engine returns; RunResult adds the timing and output
location that only the workbook-level wrapper knows about.
"""

__all__ = [
    "AuditResult",
    "RunResult",
]


@dataclass(frozen=True)
class AuditResult:
    """Materialized engine output."""
    headers: list[str]  # resolved data sheet header
    records: tuple[EvaluatedRecord, ...]  # every filtered record, in source order
    batches: tuple[ManagerBatch, ...]
    input_rows: int  # rows read from the data sheet
    lookup_misses: tuple[int, ...] = ()  # row numbers with no directory entry

    @property
    def filtered_rows(self) -> int:
        return len(self.records)

    @property
    def included_rows(self) -> int:
        return sum(1 for r in self.records if r.should_include)


@dataclass(frozen=True)
class RunResult:
    """Aggregated run outcome used for the SUMMARY line."""
    audit: AuditResult
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    output_path: str | None = None
    anomaly_log_path: str | None = None
