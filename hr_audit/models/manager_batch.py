from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .evaluated_record import EvaluatedRecord

"""ManagerBatch model: the unit handed to report delivery."""

__all__ = [
    "ManagerBatch",
    "NO_EMAIL_KEY",
]

NO_EMAIL_KEY = "NoEmail"


@dataclass(frozen=True)
class ManagerBatch:
    """All evaluated records addressed to one manager, in encounter order."""
    manager_email: str  # NO_EMAIL_KEY when the directory had no contact
    manager_name: str | None
    records: tuple[EvaluatedRecord, ...]

    def __len__(self) -> int:
        return len(self.records)

    @property
    def included_count(self) -> int:
        return sum(1 for r in self.records if r.should_include)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"ManagerEmail": self.manager_email}
        if self.manager_name:
            data["ManagerName"] = self.manager_name
        data["Records"] = [r.to_dict() for r in self.records]
        return data
