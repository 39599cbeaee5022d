from __future__ import annotations

import math
from typing import Any

"""Cell value helpers shared by every pipeline stage.

Spreadsheet cells arrive as str | int | float | bool | None, with pandas NaN
standing in for empty numeric cells. These helpers are total: they never raise.
"""

__all__ = [
    "NULL_LITERAL",
    "cell_text",
    "is_blank",
    "is_missing_email",
    "is_numeric",
]

NULL_LITERAL = "null"


def is_blank(value: Any) -> bool:
    """Return True for None, NaN, or a string that is empty once trimmed."""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def is_numeric(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        return not math.isnan(value)
    return isinstance(value, int)


def cell_text(value: Any) -> str:
    """Render a cell as trimmed text.

    Integral floats lose their ``.0`` so that ``101.0`` read by pandas and
    ``"101"`` typed by hand compare equal.
    """
    if is_blank(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def is_missing_email(value: Any) -> bool:
    """Blank emails and the literal ``null`` count as missing."""
    text = cell_text(value)
    return text == "" or text.lower() == NULL_LITERAL
