from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""AnomalyRecord model for the anomaly log.

Row-level anomalies (for example a department with no manager in the
directory) never stop a run. They are recorded here and written as JSON Lines
by hr_audit.logging.anomaly_log. Row -1 marks a sheet-level entry where no
single row applies.
"""

__all__ = [
    "AnomalyRecord",
]


@dataclass(frozen=True)
class AnomalyRecord:
    """Structured anomaly record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        sheet: Sheet the anomaly was found in
        row: Row number (1-based). Use -1 for sheet-level entries
        anomaly_type: Classification in UPPER_SNAKE_CASE format
        message: Human-readable description
    """
    timestamp: str
    sheet: str
    row: int
    anomaly_type: str
    message: str

    @staticmethod
    def create(sheet: str, row: int, anomaly_type: str, message: str) -> AnomalyRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return AnomalyRecord(
            timestamp=ts,
            sheet=sheet,
            row=row,
            anomaly_type=anomaly_type,
            message=message,
        )

    def to_json_line(self) -> str:
        # Fixed key set: serialize the dataclass fields only
        return json.dumps(asdict(self), ensure_ascii=False)
