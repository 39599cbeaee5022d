from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from pathlib import Path
from typing import Any

import pandas as pd

from hr_audit.models.cells import cell_text
from hr_audit.models.table import Table

"""Excel reader.

Sheets are parsed without a header (header=None) so that the configured header
row can be applied here, and so that column identity can later be resolved by
content instead of by header text.
"""

__all__ = [
    "SheetHeaderError",
    "read_workbook",
    "sheet_to_table",
    "sheet_first_column",
]


class SheetHeaderError(Exception):
    """Raised when a required sheet or its header row is missing."""


def read_workbook(path: Path, target_sheets: Iterable[str] | None = None) -> dict[str, pd.DataFrame]:
    """Read a workbook returning raw DataFrames keyed by sheet name.

    Parameters
    ----------
    path: workbook path
    target_sheets: restrict to these sheets (None reads every sheet)
    """
    wanted = set(target_sheets) if target_sheets is not None else None
    dfs: dict[str, pd.DataFrame] = {}
    with pd.ExcelFile(path) as xls:
        for name in xls.sheet_names:
            if wanted is not None and str(name) not in wanted:
                continue
            dfs[str(name)] = xls.parse(name, header=None)
    return dfs


def _clean_value(val: Any) -> Any:
    """Convert pandas cell values to plain Python scalars.

    NaN -> None, numpy scalars -> int/float/bool, timestamps -> ISO strings
    (date only when there is no time component).
    """
    if val is None:
        return None
    if isinstance(val, (pd.Timestamp, datetime)):
        if pd.isna(val):
            return None
        if val.hour == 0 and val.minute == 0 and val.second == 0:
            return val.date().isoformat()
        return val.isoformat()
    if pd.isna(val):
        return None
    if hasattr(val, "item"):
        # numpy scalar
        return val.item()
    return val


def sheet_to_table(df: pd.DataFrame, sheet_name: str, header_row: int = 1) -> Table:
    """Normalize a raw DataFrame into a Table.

    Steps:
    1. Validate the sheet has the header row (1-based ``header_row``)
    2. Header cells become trimmed strings (blank header -> ``Column <n>``)
    3. Rows below the header become body rows; fully blank rows are skipped
    """
    header_index = header_row - 1
    if df.shape[0] <= header_index:
        raise SheetHeaderError(f"sheet '{sheet_name}' lacks header row {header_row}")
    raw_header = [cell_text(_clean_value(v)) for v in df.iloc[header_index].tolist()]
    if not any(raw_header):
        raise SheetHeaderError(f"sheet '{sheet_name}' has an empty header row")
    header = [text if text else f"Column {pos}" for pos, text in enumerate(raw_header, start=1)]

    rows: list[list[Any]] = []
    row_numbers: list[int] = []
    for offset, (_, raw) in enumerate(df.iloc[header_index + 1:].iterrows()):
        if raw.isna().all():
            continue
        rows.append([_clean_value(v) for v in raw.tolist()])
        row_numbers.append(header_row + 1 + offset)

    return Table(
        sheet_name=sheet_name,
        header=header,
        rows=rows,
        first_row_number=header_row + 1,
        source_row_numbers=tuple(row_numbers),
    )


def sheet_first_column(df: pd.DataFrame, header_row: int = 1) -> list[Any]:
    """Values below the header row in the first column of a reference sheet."""
    if df.shape[1] == 0:
        return []
    return [_clean_value(v) for v in df.iloc[header_row:, 0].tolist()]
