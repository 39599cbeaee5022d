from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from .config_models import CANONICAL_FIELDS

"""EmployeeRecord model.

EmployeeRecord replaces the ad hoc per-row dictionaries of a spreadsheet with
a structured entity: canonical fields live in ``fields``, columns whose names
were not resolved to the canonical vocabulary are carried through in ``extra``.
"""

__all__ = [
    "EmployeeRecord",
]

_CANONICAL = frozenset(CANONICAL_FIELDS)


@dataclass(frozen=True)
class EmployeeRecord:
    """One data row after header normalization (and, later, enrichment).

    ``columns`` keeps the resolved header order so output can be rendered in
    the same order as the source sheet.
    """
    row_number: int  # 1-based sheet row
    fields: dict[str, Any]  # canonical name -> raw value
    extra: dict[str, Any] = field(default_factory=dict)  # pass-through columns
    columns: tuple[str, ...] = ()
    manager_email: str = ""
    manager_name: str = ""

    @classmethod
    def from_row(cls, row_number: int, header: list[str], row: list[Any]) -> EmployeeRecord:
        """Build a record from a positional row.

        When two columns resolve to the same name the first one wins; missing
        trailing cells read as None.
        """
        fields: dict[str, Any] = {}
        extra: dict[str, Any] = {}
        columns: list[str] = []
        for index, name in enumerate(header):
            if name in fields or name in extra:
                continue
            value = row[index] if index < len(row) else None
            target = fields if name in _CANONICAL else extra
            target[name] = value
            columns.append(name)
        return cls(row_number=row_number, fields=fields, extra=extra, columns=tuple(columns))

    def get(self, name: str) -> Any:
        if name in self.fields:
            return self.fields[name]
        return self.extra.get(name)

    def values(self) -> dict[str, Any]:
        """All column values in source order."""
        return {name: self.get(name) for name in self.columns}

    def with_manager(self, email: str, name: str) -> EmployeeRecord:
        return replace(self, manager_email=email, manager_name=name)
