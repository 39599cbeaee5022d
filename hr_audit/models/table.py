from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

"""Table model: a header row plus positional body rows.

Raw rows have no identity of their own; a cell's meaning comes only from its
position relative to the header of the same table.
"""

__all__ = [
    "Table",
]


@dataclass(frozen=True)
class Table:
    """One sheet worth of tabular input.

    ``first_row_number`` is the 1-based sheet row of ``rows[0]`` and is only
    used to report row numbers back to humans.
    """
    sheet_name: str
    header: list[str]
    rows: list[list[Any]] = field(default_factory=list)
    first_row_number: int = 2
    source_row_numbers: tuple[int, ...] = ()  # set when blank rows were skipped

    @property
    def width(self) -> int:
        return len(self.header)

    def cell(self, row: list[Any], index: int) -> Any:
        # Short rows are padded with None so every lookup is total
        return row[index] if index < len(row) else None

    def columns(self) -> list[list[Any]]:
        """Column-major view of the body, one list per header position."""
        return [[self.cell(row, i) for row in self.rows] for i in range(self.width)]

    def row_numbers(self) -> list[int]:
        if len(self.source_row_numbers) == len(self.rows):
            return list(self.source_row_numbers)
        return list(range(self.first_row_number, self.first_row_number + len(self.rows)))
