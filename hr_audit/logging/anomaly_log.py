from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from hr_audit.models.anomaly_record import AnomalyRecord

"""Anomaly log buffering.

- JSON Lines, fixed key set (see AnomalyRecord)
- One file per run: ``logs/anomalies-YYYYMMDD-HHMMSS.log`` (UTC), created on
  first flush
- Records are buffered in memory and written once at the end of the run
"""

__all__ = [
    "AnomalyRecord",
    "AnomalyLogBuffer",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class AnomalyLogBuffer:
    """In-memory buffer for anomaly records. Flush writes JSON Lines.

    Single-threaded use only.
    """
    def __init__(self, logs_dir: Path | None = None) -> None:
        self._records: list[AnomalyRecord] = []
        self._file_path: Path | None = None
        self._logs_dir = logs_dir if logs_dir is not None else LOGS_DIR

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"anomalies-{stamp}.log"
        return self._file_path

    def append(self, record: AnomalyRecord) -> None:
        self._records.append(record)

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._records)

    def flush(self) -> Path | None:
        """Append buffered records to the log file.

        Returns None when there was nothing to write, so clean runs leave no
        empty log files behind.
        """
        if not self._records:
            return None
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
