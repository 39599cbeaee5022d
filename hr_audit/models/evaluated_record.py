from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .employee_record import EmployeeRecord

"""EvaluatedRecord model: an enriched record plus its rule outcomes."""

__all__ = [
    "EvaluatedRecord",
    "FLAG_KEYS",
]

FLAG_KEYS = ("Cond1", "Cond2", "Cond3", "Cond4", "Cond5")


@dataclass(frozen=True)
class EvaluatedRecord:
    """Rule evaluation outcome for one record.

    Every flag is kept, true or false, so downstream consumers can audit why a
    record was or was not included.

    Attributes:
        record: The enriched source record
        rendered: Column values in source order with date fields converted
        cond1: Retire date / retire cause inconsistency
        cond2: Important field missing on an active employee
        cond3: Identity duplicate (surname, name, date of birth)
        cond4: Email reused under the same manager
        cond5: Designated job category without an email
        missing_fields: Comma-joined blank important fields (only when cond2)
        reason: "; "-joined phrases of the true conditions, in order 1 to 5
    """
    record: EmployeeRecord
    rendered: dict[str, Any]
    cond1: bool
    cond2: bool
    cond3: bool
    cond4: bool
    cond5: bool
    missing_fields: str
    reason: str

    @property
    def flags(self) -> tuple[bool, bool, bool, bool, bool]:
        return (self.cond1, self.cond2, self.cond3, self.cond4, self.cond5)

    @property
    def should_include(self) -> bool:
        return any(self.flags)

    @property
    def is_duplicate(self) -> bool:
        return self.cond3 or self.cond4

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the output record contract."""
        data = dict(self.rendered)
        # Empty strings on a directory lookup miss, never omitted
        data["ManagerEmail"] = self.record.manager_email
        data["ManagerName"] = self.record.manager_name
        for key, flag in zip(FLAG_KEYS, self.flags):
            data[key] = flag
        data["ShouldInclude"] = self.should_include
        data["MissingFields"] = self.missing_fields
        data["Reason"] = self.reason
        data["IsDuplicate"] = self.is_duplicate
        return data
