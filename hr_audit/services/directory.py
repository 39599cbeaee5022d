from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from hr_audit.models.cells import cell_text
from hr_audit.models.config_models import DirectoryColumns
from hr_audit.models.directory_entry import DirectoryEntry
from hr_audit.models.employee_record import EmployeeRecord
from hr_audit.models.table import Table

"""Manager directory (reference table) and record enrichment.

The directory maps an organizational unit to the manager who receives that
unit's batch. Enrichment must happen before duplicate detection, since email
duplicates are counted per manager.
"""

__all__ = [
    "DirectoryError",
    "build_directory",
    "enrich_records",
    "find_column",
]

logger = logging.getLogger(__name__)


class DirectoryError(Exception):
    """Raised when the directory sheet lacks a required column."""


def find_column(header: Sequence[str], aliases: Sequence[str]) -> int | None:
    """Index of the first alias present in ``header`` (case-insensitive)."""
    folded = [h.strip().casefold() for h in header]
    for alias in aliases:
        key = alias.strip().casefold()
        if key in folded:
            return folded.index(key)
    return None


def build_directory(table: Table, columns: DirectoryColumns) -> dict[str, DirectoryEntry]:
    """Build the unit -> manager lookup from the directory sheet.

    Rows with an empty unit or an empty email are dropped. When a unit appears
    more than once the last row wins.

    Raises:
        DirectoryError: If the unit or email column cannot be found
    """
    unit_idx = find_column(table.header, columns.unit)
    email_idx = find_column(table.header, columns.email)
    if unit_idx is None or email_idx is None:
        missing = [
            label
            for label, idx in (("unit", unit_idx), ("email", email_idx))
            if idx is None
        ]
        raise DirectoryError(
            f"sheet '{table.sheet_name}' missing directory columns {missing} "
            f"(header: {table.header})"
        )
    name_idx = find_column(table.header, columns.name)

    directory: dict[str, DirectoryEntry] = {}
    for row in table.rows:
        unit = cell_text(table.cell(row, unit_idx))
        email = cell_text(table.cell(row, email_idx))
        if not unit or not email:
            continue
        name = cell_text(table.cell(row, name_idx)) if name_idx is not None else ""
        if unit in directory:
            logger.debug(f"unit '{unit}' listed again, keeping {email}", extra={"sheet": table.sheet_name})
        directory[unit] = DirectoryEntry(unit=unit, email=email, name=name)
    return directory


def enrich_records(
    records: Iterable[EmployeeRecord],
    directory: dict[str, DirectoryEntry],
    unit_field: str,
) -> list[EmployeeRecord]:
    """Attach manager email and name; units without an entry get empty strings."""
    enriched: list[EmployeeRecord] = []
    for record in records:
        entry = directory.get(cell_text(record.get(unit_field)))
        if entry is None:
            enriched.append(record.with_manager("", ""))
        else:
            enriched.append(record.with_manager(entry.email, entry.name))
    return enriched
