from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from hr_audit.models.cells import cell_text
from hr_audit.models.employee_record import EmployeeRecord

"""Population filter: restrict the roster to approved organizational units."""

__all__ = [
    "build_approved_units",
    "filter_population",
]


def build_approved_units(values: Iterable[Any]) -> frozenset[str]:
    """Trimmed, non-blank unit identifiers from the reference list."""
    return frozenset(text for text in (cell_text(v) for v in values) if text)


def filter_population(
    records: Iterable[EmployeeRecord], approved: frozenset[str], unit_field: str
) -> list[EmployeeRecord]:
    """Keep records whose trimmed unit value is an approved unit, in order."""
    return [r for r in records if cell_text(r.get(unit_field)) in approved]
